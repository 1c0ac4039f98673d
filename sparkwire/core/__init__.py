"""Value model, kind enumerations and errors."""
