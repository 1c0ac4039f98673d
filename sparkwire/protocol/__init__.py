"""Wire encoding and decoding of Sparkplug B payloads."""
