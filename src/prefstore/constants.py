import re
from pathlib import Path

# Identifiers are letters, digits and periods, by convention "<namespace>.<name>"
SETTING_ID_PATTERN = re.compile(r"[A-Za-z0-9.]+")

# One "id = value" line; the value runs to the end of the line, untrimmed
ENTRY_LINE_PATTERN = re.compile(r"^\s*([A-Za-z0-9.]+)\s*=\s*(.*)$")

# Environment variable that points at the application config
CONFIG_ENV_VAR = "PREFSTORE_CONFIG"

# Managed settings file used when the config does not name one
DEFAULT_SETTINGS_FILE = Path("~/.config/prefstore/settings.txt")
