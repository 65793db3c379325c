"""Constants for license-validator."""

# Exit codes
EXIT_SUCCESS = 0  # Every dependency passed the policy
EXIT_VIOLATIONS = 1  # At least one dependency violates the policy
EXIT_ERROR = 2  # Configuration or resolution error, no verdict possible

# License field values that mean "nothing declared"
PLACEHOLDER_LICENSE_VALUES = ("UNKNOWN", "NONE", "")

# Default remote source for descriptor lookups
DEFAULT_REPOSITORY_URL = "https://pypi.org/pypi"
