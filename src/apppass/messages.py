"""User messages and help text for AppPass."""

# Success messages
SUCCESS_CREATED = "Password saved securely for '{name}'."
SUCCESS_CUSTOM_CREATED = "Custom password saved for '{name}'."
SUCCESS_MEMORIZABLE = "Memorizable password saved for '{name}'."
SUCCESS_UPDATED = "Password updated successfully for '{name}'."
SUCCESS_DELETED = "Password for '{name}' deleted successfully."
SUCCESS_EXPORTED = "Exported {count} password(s) to '{path}'."
SUCCESS_IMPORTED = "Imported {count} password(s) from '{path}'."
SUCCESS_OTP = "OTP generated and saved for '{name}'."
SUCCESS_LENGTH_SAVED = "Default password length set to {length}."
SUCCESS_LENGTH_RESET = "Default password length reset to {length}."

# Error messages
ERROR_NOT_FOUND = "No password found for '{name}'."
ERROR_NOT_FOUND_UPDATE = (
    "No password found for '{name}'. Use create to add a new password."
)
ERROR_EMPTY_NAME = "Application name cannot be empty"
ERROR_EMPTY_PASSWORD = "Password cannot be empty"
ERROR_GENERIC = "Error: {error}"

# Info messages
INFO_NO_ENTRIES = "No applications stored."
INFO_NO_AUTO = "No auto-generated passwords to update"
INFO_NO_CUSTOM = "No custom passwords to update"
INFO_OTP_EXPIRES = "Expires in: {ttl} seconds"
INFO_OTP_AUTODELETE = (
    "This password will be automatically deleted from the keyring after {ttl} seconds."
)
INFO_OTP_WAITING = "Waiting for the OTP to expire (Ctrl+C to stop waiting)..."
INFO_LOCKED = "Application locked due to inactivity."
INFO_LOCK_SET = "Auto-lock set to {timeout} seconds."
INFO_GOODBYE = "Goodbye!"
INFO_CANCELLED = "Cancelled"
