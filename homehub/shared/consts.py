from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnumStorageBackend(str, Enum):
    FILE = "file"
    MONGO = "mongo"


DEMO_MODE_HEADER = "X-Demo-Mode"
RESERVED_SERVICE_IDS = frozenset({"", "base"})

HUE_SERVICE_ID = "hue"
HIVE_SERVICE_ID = "hive"
SPOTIFY_SERVICE_ID = "spotify"

# Slug namespaces of the lighting bridge besides its lights ("hue")
HUE_SCENE_NAMESPACE = "hue:scene"
HUE_ROOM_NAMESPACE = "hue:room"
HUE_ZONE_NAMESPACE = "hue:zone"
