"""Default constants and configuration values for sparkwire."""

from .config import DEFAULT_ENCODER_CONFIG, OVERFLOW_FAIL, OVERFLOW_WRAP, SEQ_MODULUS

__all__ = ["DEFAULT_ENCODER_CONFIG", "OVERFLOW_FAIL", "OVERFLOW_WRAP", "SEQ_MODULUS"]
