from datetime import date, datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

from ochre.enums import LinkVariant, PropertyValueType

Item = TypeVar("Item")


class Identification(BaseModel):
    label: str
    abbreviation: str = ""


class Footnote(BaseModel):
    uuid: str
    label: str
    content: str = ""


class Document(BaseModel):
    content: str
    footnotes: list[Footnote] = []


class Note(BaseModel):
    number: int
    title: str | None = None
    content: str


class License(BaseModel):
    content: str
    url: str


class ContextItem(BaseModel):
    uuid: str
    publication_datetime: datetime | None = None
    number: int | None = None
    content: str


class ContextNode(BaseModel):
    tree: ContextItem
    project: ContextItem
    spatial_units: list[ContextItem] = []


class Context(BaseModel):
    nodes: list[ContextNode] = []
    display_path: str = ""


class Person(BaseModel):
    uuid: str
    publication_datetime: datetime | None = None
    type: str | None = None
    date: datetime | None = None
    identification: Identification | None = None
    content: str | None = None


class Image(BaseModel):
    publication_datetime: datetime | None = None
    identification: Identification | None = None
    url: str | None = None
    html_prefix: str | None = None
    content: str | None = None


class ImageMapArea(BaseModel):
    uuid: str
    publication_datetime: datetime | None = None
    type: str | None = None
    title: str
    shape: Literal["rectangle", "polygon"]
    coords: list[int] = []


class ImageMap(BaseModel):
    areas: list[ImageMapArea] = []
    width: int | None = None
    height: int | None = None


class Coordinates(BaseModel):
    latitude: float
    longitude: float
    type: str | None = None
    label: str | None = None


class PropertyValue(BaseModel):
    content: str
    type: PropertyValueType
    category: str | None = None
    uuid: str | None = None
    publication_datetime: datetime | None = None


class Property(BaseModel):
    label: str
    values: list[PropertyValue] = []
    comment: str | None = None
    properties: list["Property"] = []


class LinkImage(BaseModel):
    is_inline: bool
    height: int
    width: int
    height_preview: int
    width_preview: int


class Link(BaseModel):
    variant: LinkVariant
    uuid: str
    type: str | None = None
    identification: Identification | None = None
    content: str | None = None
    publication_datetime: datetime | None = None
    image: LinkImage | None = None
    """Only set for links of the bibliography variant."""
    bibliographies: list["Bibliography"] | None = None


class Observation(BaseModel):
    number: int | None = None
    date: datetime | None = None
    observers: list[str] = []
    notes: list[Note] = []
    links: list[Link] = []
    properties: list[Property] = []


class EventAgent(BaseModel):
    uuid: str
    content: str


class Event(BaseModel):
    date: datetime | None = None
    label: str
    agent: EventAgent | None = None


class Interpretation(BaseModel):
    date: datetime | None = None
    number: int | None = None
    properties: list[Property] = []


class Period(BaseModel):
    uuid: str
    publication_datetime: datetime | None = None
    type: str | None = None
    identification: Identification


class ProjectIdentification(Identification):
    website: str | None = None


class MetadataProject(BaseModel):
    identification: ProjectIdentification


class MetadataItem(BaseModel):
    identification: Identification
    category: str | None = None
    type: str | None = None
    max_length: int | None = None


class Metadata(BaseModel):
    project: MetadataProject | None = None
    item: MetadataItem | None = None
    dataset: str = ""
    publisher: str = ""
    languages: list[str] = []
    identifier: str = ""
    description: str = ""


"""
Bibliographies

The nested form drops the provenance fields (publication timestamp and context)
so that a bibliography embedded in a link or a resource carries only what it says.
"""


class Citation(BaseModel):
    format: str | None = None
    short: str | None = None
    long: str | None = None


class PublicationInfo(BaseModel):
    publishers: list[Person] = []
    start_date: date | None = None


class EntryInfo(BaseModel):
    start_issue: str
    start_volume: str


class BibliographySourceResource(BaseModel):
    uuid: str
    publication_datetime: datetime | None = None
    type: str | None = None
    identification: Identification


class BibliographySource(BaseModel):
    resource: BibliographySourceResource | None = None
    document_url: str | None = None


class BaseBibliography(BaseModel):
    uuid: str
    type: str | None = None
    number: int | None = None
    identification: Identification | None = None
    project_identification: Identification | None = None
    citation: Citation = Citation()
    publication_info: PublicationInfo = PublicationInfo()
    entry_info: EntryInfo | None = None
    source: BibliographySource = BibliographySource()
    authors: list[Person] = []
    properties: list[Property] = []


class Bibliography(BaseBibliography):
    publication_datetime: datetime | None = None
    context: Context | None = None


class NestedBibliography(BaseBibliography):
    pass


"""
Resources
"""


class BaseResource(BaseModel):
    uuid: str
    variant: Literal["resource"] = "resource"
    type: str | None = None
    number: int | None = None
    format: str | None = None
    identification: Identification
    date: datetime | None = None
    image: Image | None = None
    creators: list[Person] = []
    notes: list[Note] = []
    description: str = ""
    document: Document | None = None
    href: str | None = None
    image_map: ImageMap | None = None
    periods: list[Period] = []
    links: list[Link] = []
    reverse_links: list[Link] = []
    properties: list[Property] = []
    cited_bibliographies: list[Bibliography] = []
    resources: list["NestedResource"] = []


class Resource(BaseResource):
    publication_datetime: datetime | None = None
    context: Context | None = None
    license: License | None = None
    copyright: str | None = None


class NestedResource(BaseResource):
    pass


"""
Spatial units
"""


class BaseSpatialUnit(BaseModel):
    uuid: str
    variant: Literal["spatialUnit"] = "spatialUnit"
    type: str | None = None
    number: int | None = None
    identification: Identification
    image: Image | None = None
    description: str = ""
    coordinates: Coordinates | None = None


class SpatialUnit(BaseSpatialUnit):
    publication_datetime: datetime | None = None
    context: Context | None = None
    license: License | None = None
    observations: list[Observation] = []
    events: list[Event] = []


class NestedSpatialUnit(BaseSpatialUnit):
    properties: list[Property] = []


"""
Concepts
"""


class BaseConcept(BaseModel):
    uuid: str
    variant: Literal["concept"] = "concept"
    number: int | None = None
    identification: Identification
    interpretations: list[Interpretation] = []


class Concept(BaseConcept):
    publication_datetime: datetime | None = None
    context: Context | None = None
    license: License | None = None


class NestedConcept(BaseConcept):
    pass


"""
Containers
"""


class SetItems(BaseModel):
    resources: list[NestedResource] = []
    spatial_units: list[NestedSpatialUnit] = []
    concepts: list[NestedConcept] = []


class BaseSet(BaseModel):
    uuid: str
    variant: Literal["set"] = "set"
    type: str | None = None
    number: int | None = None
    date: datetime | None = None
    identification: Identification
    is_suppressing_blanks: bool = False
    description: str = ""
    creators: list[Person] = []
    items: SetItems = SetItems()


class Set(BaseSet):
    publication_datetime: datetime | None = None
    license: License | None = None


class NestedSet(BaseSet):
    pass


class TreeItems(BaseModel):
    resources: list[Resource] = []
    spatial_units: list[SpatialUnit] = []
    concepts: list[Concept] = []


class BaseTree(BaseModel):
    uuid: str
    variant: Literal["tree"] = "tree"
    type: str | None = None
    number: int | None = None
    date: datetime | None = None
    identification: Identification
    creators: list[Person] = []
    items: TreeItems = TreeItems()
    properties: list[Property] = []


class Tree(BaseTree):
    publication_datetime: datetime | None = None
    license: License | None = None


class NestedTree(BaseTree):
    pass


"""
Envelope
"""


class BelongsTo(BaseModel):
    uuid: str
    abbreviation: str


class Data(BaseModel, Generic[Item]):
    uuid: str
    belongs_to: BelongsTo
    publication_datetime: datetime | None = None
    metadata: Metadata
    languages: list[str] = []
    item: Item


Property.model_rebuild()
Link.model_rebuild()
Observation.model_rebuild()
BaseResource.model_rebuild()
Resource.model_rebuild()
NestedResource.model_rebuild()
