from pathlib import Path

# Directory where the user is running the CLI from
CWD = Path.cwd()

# Table rendering parameters
DESCRIPTION_FIRST_SENTENCE_LENGTH = 100
DESCRIPTION_WRAP_WIDTH = 60

# Exit codes
EXIT_CODE_CONFIGURATION_ERROR = 2
EXIT_CODE_TEMPLATE_ERROR = 3
EXIT_CODE_UNEXPECTED_ERROR = 4
