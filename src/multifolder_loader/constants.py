CONFIG_NAME = "doorstop_config.ini"

MAIN_SECTION = "MultiFolderLoader"
ADDITIONAL_SECTION_PREFIX = "MultiFolderLoader_"
ENABLE_ADDITIONAL_KEY = "enableAdditionalDirectories"

BASE_DIR_KEY = "baseDir"
DISABLED_LIST_KEY = "disabledModsListPath"
ENABLED_LIST_KEY = "enabledModsListPath"

MARKER_FILE = "ModInfo.xml"
PATCHERS_DIR = "patchers"
PLUGINS_DIR = "plugins"
LIBRARY_SUFFIX = ".dll"

USER_DATA_VARIABLE = "USERDATAFOLDER"
USER_DATA_FLAG = "-userdatafolder="
PRODUCT_FOLDER = "7DaysToDie"
