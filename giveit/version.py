"""SDK version information."""

VERSION = "1.0.0"
SDK_VERSION_TAG = f"Python {VERSION}"
