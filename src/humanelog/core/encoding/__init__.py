"""Text encoders for log output."""
