"""Default encoder configuration and wire constants."""

SEQ_MODULUS = 256

OVERFLOW_FAIL = "fail"
OVERFLOW_WRAP = "wrap"
OVERFLOW_POLICIES = (OVERFLOW_FAIL, OVERFLOW_WRAP)

DEFAULT_ENCODER_CONFIG = {
    "overflow_policy": OVERFLOW_FAIL,
    "check_dataset_cell_types": True,
    "max_depth": 64,
    "log_level": "INFO",
}
