from enum import Enum, unique

ORIGINAL_PATH = "__pipework_original_path__"
PATH_SEPARATOR = "/"


@unique
class RunMode(str, Enum):
    MAIN = "main"
    THREAD = "thread"


@unique
class PathErrorKind(str, Enum):
    NO_LEADING_SLASH = "no_leading_slash"
    EMPTY = "empty"

    @property
    def description(self) -> str:
        if self is PathErrorKind.NO_LEADING_SLASH:
            return "Path must start with /"
        return "Path cannot be empty"
