# tests/sample_configs.py
"""
Config classes shared by the gateway, introspection and CLI tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field


# ------------------------------------------------------------------------------
# plain values
# ------------------------------------------------------------------------------


@dataclass
class ValuesConfig:
    """
    Values
    """

    app_name: str = ""
    """String value"""

    index: int = 0
    """Integer value"""

    accuracy: float = 0.0
    """Float value"""

    enabled: bool = False
    """Bool value"""

    disabled: bool = False
    """Bool value"""

    nulled: Optional[int] = 1
    """Null value"""

    trusted_ips: List[str] = field(default_factory=list)
    """Array value"""

    untyped: Any = ""
    """Untyped value"""

    _filtered: bytes = b""
    """Filtered value"""

    point: Dict[str, float] = field(default_factory=lambda: {"x": 1.1, "y": 2.2})
    """Indexed array"""

    must_be_empty: List[int] = field(default_factory=lambda: [1, 2, 3])
    """Empty if in text"""

    def set_filtered(self, value: str) -> None:
        self._filtered = bytes.fromhex(value.replace(" ", ""))

    def get_filtered(self) -> str:
        return self._filtered.hex(" ")


VALUES_INI = """\
;
; Values

; String value
app_name = my-"application"

; Integer value
index = 2

; Float value
accuracy = 0.5

; Bool value
enabled = true

; Bool value
disabled = false

; Null value
nulled = null

; Array value
trusted_ips = 127.0.0.1, 192.168.0.1

; Untyped value
untyped = doesnt matter

; Filtered value
filtered = 74 65 73 74

; Indexed array
point[a] = 1.1
point[b] = 2.2
point[c] = 3.3

; Empty if in text
must_be_empty =
"""


def make_values_config() -> ValuesConfig:
    return ValuesConfig(
        app_name='my-"application"',
        index=2,
        accuracy=0.5,
        enabled=True,
        disabled=False,
        nulled=None,
        trusted_ips=["127.0.0.1", "192.168.0.1"],
        untyped="doesnt matter",
        _filtered=b"test",
        point={"a": 1.1, "b": 2.2, "c": 3.3},
        must_be_empty=[],
    )


# ------------------------------------------------------------------------------
# sections
# ------------------------------------------------------------------------------


@dataclass
class ExternalApiUrls:
    rest_v1: str = ""
    rest_v2: str = ""


@dataclass
class DirsConfig:
    """
    Directories
    """

    run_dir: str = ""
    working_dir: str = ""
    log_dir: str = ""


@dataclass
class DbConfig:
    """
    Database connection
    """

    host: str = ""
    dbname: str = ""
    username: str = ""


@dataclass
class SectionsConfig:
    """
    Config with sections
    """

    app_name: str = ""
    """Application name"""

    version: str = ""
    """Version"""

    external_api_urls: Optional[ExternalApiUrls] = None

    dirs: Optional[DirsConfig] = None
    """System directories"""

    db: Optional[DbConfig] = None


SECTIONS_INI = """\
;
; Config with sections

; Application name
app_name = my-"application"

; Version
version = 1.2.3

[external_api_urls]
rest_v1 = http://127.0.0.1/v1
rest_v2 = http://127.0.0.1/v2

; System directories
[dirs]
run_dir = /run/my-application
working_dir = /var/lib/my-application
log_dir = /var/log/my-application

; Database connection
[db]
host = localhost
dbname = my_app_db
username = my_app_user
"""


def make_sections_config() -> SectionsConfig:
    return SectionsConfig(
        app_name='my-"application"',
        version="1.2.3",
        external_api_urls=ExternalApiUrls(
            rest_v1="http://127.0.0.1/v1", rest_v2="http://127.0.0.1/v2"
        ),
        dirs=DirsConfig(
            run_dir="/run/my-application",
            working_dir="/var/lib/my-application",
            log_dir="/var/log/my-application",
        ),
        db=DbConfig(host="localhost", dbname="my_app_db", username="my_app_user"),
    )


# ------------------------------------------------------------------------------
# defaults and non-instantiable section types
# ------------------------------------------------------------------------------


class LogConfig(Protocol):
    def info(self, message: str) -> None: ...


class NotifyConfig(ABC):
    url: str = ""

    @abstractmethod
    def notify(self) -> None: ...


class UnixNotify(NotifyConfig):
    def notify(self) -> None:
        pass


@dataclass
class DirmonConfig:
    app_name: str = "directory_monitor"
    version: str = "0.11.3"
    dirs: Dict[str, str] = field(default_factory=dict)
    logs: Optional[LogConfig] = None
    notify: Optional[NotifyConfig] = None


SKIPPED_IN_INI = """\
app_name = dirmon
unknown_key = whatever

[dirs]
zones = /var/lib/dirmon/zones
events = /var/lib/dirmon/events

[logs]
level = debug

[notify]
url = unix:///dev/null
"""

SKIPPED_OUT_INI = """\
app_name = dirmon
version = 0.11.3
dirs[zones] = /var/lib/dirmon/zones
dirs[events] = /var/lib/dirmon/events
logs = null

[notify]
url = unix:///dev/null
"""


# ------------------------------------------------------------------------------
# nesting deeper than two levels
# ------------------------------------------------------------------------------


@dataclass
class Level3:
    name: str = ""


@dataclass
class Level2:
    name: str = ""
    config: Level3 = field(default_factory=Level3)


@dataclass
class Level1:
    name: str = ""
    config: Level2 = field(default_factory=Level2)


@dataclass
class LevelsRoot:
    name: str = ""
    config: Level1 = field(default_factory=Level1)


LEVELS_INI = """\
name = root

[config]
name = lvl1
"""


# ------------------------------------------------------------------------------
# small shapes
# ------------------------------------------------------------------------------


@dataclass
class AppConfig:
    app_name: str = ""
    index: int = 0
    enabled: bool = False


@dataclass
class RequiredArgs:
    name: str


class CamelConfig:
    appName = "demo"
    maxRetries: int = 3
    _secret: str = "hidden"
    timeoutSeconds: Optional[float] = None


@dataclass
class TitledFields:
    plain: str = "a"
    with_meta: str = field(default="b", metadata={"title": "From metadata"})
    with_var: str = "c"
    """@var str Typed title"""


@dataclass
class TypedArrays:
    ports: List[int] = field(default_factory=list)
    flags: List[bool] = field(default_factory=list)
    weights: Dict[str, float] = field(default_factory=dict)
    anything: list = field(default_factory=list)


@dataclass
class SectionFirst:
    db: DbConfig = field(default_factory=DbConfig)
    name: str = ""


# ------------------------------------------------------------------------------
# pydantic
# ------------------------------------------------------------------------------


class ServerModel(BaseModel):
    """
    Server settings
    """

    host: str = "localhost"
    port: int = Field(8080, description="Listening port")
    debug: bool = False
    tags: List[str] = Field(default_factory=list)


class AppModel(BaseModel):
    app_name: str = ""
    server: ServerModel = Field(default_factory=ServerModel)


# ------------------------------------------------------------------------------
# mapping arrays, plain sections and mixed declarations
# ------------------------------------------------------------------------------


@dataclass
class MapArrays:
    weights: Dict[str, float] = field(default_factory=dict)
    labels: dict = field(default_factory=dict)


class PlainSub:
    host = "localhost"
    port = "5432"


@dataclass
class HasPlainSub:
    name: str = ""
    sub: PlainSub = field(default_factory=PlainSub)


class Ordered:
    a = 1
    b: int
    c: int = 2
