from pathlib import Path

VERSION = "0.1.0"
PROGRAM_NAME = "realm"
LOGGER_NAME = "realm"

# Config file search
CONFIG_FILENAME = "bitcoin.conf"
HOME_CONFIG_DIR = Path(".bitcoin")
CONFIG_ENV_VAR = "REALM_CONFIG"
CONFIG_ENCODING = "utf-8"

# Directive surface forms
MAIN_SECTION = "[main]"
TEST_SECTION = "[test]"
COMMENT_PREFIX = "#"
RPCUSER_PREFIX = "rpcuser="
RPCPASSWORD_PREFIX = "rpcpassword="
RPCCONNECT_PREFIX = "rpcconnect="
VALUE_TERMINATORS = " \t\n"
LEADING_WHITESPACE = " \t"

# RPC defaults
DEFAULT_RPC_PORT = 8332
DEFAULT_RPC_SCHEME = "http"
DEFAULT_RPC_TIMEOUT_S = 30
JSONRPC_VERSION = "1.0"
PASSWORD_MASK = "********"

# Logging
LOG_LEVEL_ENV_VARS = ("REALM_LOG_LEVEL", "LOG_LEVEL")
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s %(filename)s:%(lineno)d] %(message)s"
