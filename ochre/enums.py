from enum import Enum


class PropertyValueType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    DATE_TIME = "dateTime"
    TIME = "time"
    IDREF = "IDREF"


class LinkVariant(str, Enum):
    RESOURCE = "resource"
    CONCEPT = "concept"
    SET = "set"
    TREE = "tree"
    PERSON = "person"
    BIBLIOGRAPHY = "bibliography"
    EPIGRAPHIC_UNIT = "epigraphicUnit"


class WebsiteType(str, Enum):
    TRADITIONAL = "traditional"
    DIGITAL_COLLECTION = "digital-collection"
    PLUM = "plum"
    CEDAR = "cedar"
    ELM = "elm"
    MAPLE = "maple"
    OAK = "oak"
    PALM = "palm"


class WebsiteStatus(str, Enum):
    DEVELOPMENT = "development"
    PREVIEW = "preview"
    PRODUCTION = "production"


class WebsitePrivacy(str, Enum):
    PUBLIC = "public"
    PASSWORD = "password"
    PRIVATE = "private"


class PageWidth(str, Enum):
    DEFAULT = "default"
    FULL = "full"
    LARGE = "large"


class PresentationRole(str, Enum):
    PAGE = "page"
    ELEMENT = "element"
