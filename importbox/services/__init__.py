"""Services for importbox."""
