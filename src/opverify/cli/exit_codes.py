"""Exit codes for the opverify CLI."""

EXIT_SUCCESS = 0
EXIT_ISSUES_FOUND = 1
EXIT_REGISTRY_ERROR = 2
EXIT_INVALID_USAGE = 3
EXIT_UNSUPPORTED_PLATFORM = 4
