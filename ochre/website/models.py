from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ochre.enums import PageWidth, WebsitePrivacy, WebsiteStatus, WebsiteType
from ochre.models import Bibliography, Document, Identification, License, Person


class Style(BaseModel):
    label: str
    value: str


class WebImage(BaseModel):
    url: str
    label: str | None = None
    width: int = 0
    height: int = 0


"""
Components

Each component model is keyed by its tag in the ``component`` field, which is
the discriminator of the ``Component`` union below.
"""


class AnnotatedDocumentComponent(BaseModel):
    component: Literal["annotated-document"] = "annotated-document"
    document: Document


class AnnotatedImageComponent(BaseModel):
    component: Literal["annotated-image"] = "annotated-image"
    image_uuid: str
    is_searchable: bool = False


class BibliographyComponent(BaseModel):
    component: Literal["bibliography"] = "bibliography"
    bibliographies: list[Bibliography]
    layout: str = "long"


class BlogComponent(BaseModel):
    component: Literal["blog"] = "blog"
    blog_id: str


class ButtonComponent(BaseModel):
    component: Literal["button"] = "button"
    href: str


class CollectionComponent(BaseModel):
    component: Literal["collection"] = "collection"
    variant: str
    layout: str = "image-start"
    collection_id: str


class IIIFViewerComponent(BaseModel):
    component: Literal["iiif-viewer"] = "iiif-viewer"
    manifest_url: str


class ImageComponent(BaseModel):
    component: Literal["image"] = "image"
    image: WebImage


class ImageGalleryComponent(BaseModel):
    component: Literal["image-gallery"] = "image-gallery"


class InteractiveChapterTableComponent(BaseModel):
    component: Literal["interactive-chapter-table"] = "interactive-chapter-table"


class ItemGalleryComponent(BaseModel):
    component: Literal["item-gallery"] = "item-gallery"


class MenuComponent(BaseModel):
    component: Literal["menu"] = "menu"


class MenuItemComponent(BaseModel):
    component: Literal["menu-item"] = "menu-item"


class NColumnsComponent(BaseModel):
    component: Literal["n-columns"] = "n-columns"
    columns: list["WebElement"] = []


class NRowsComponent(BaseModel):
    component: Literal["n-rows"] = "n-rows"
    rows: list["WebElement"] = []


class NetworkGraphComponent(BaseModel):
    component: Literal["network-graph"] = "network-graph"


class TableComponent(BaseModel):
    component: Literal["table"] = "table"
    table_id: str
    headers: list[str] = []


class TextComponent(BaseModel):
    component: Literal["text"] = "text"
    variant: str = "block"
    content: str


class TextImageComponent(BaseModel):
    component: Literal["text-image"] = "text-image"
    variant: str = "block"
    layout: str = "image-start"
    caption_layout: str = "bottom"
    content: str
    image: WebImage
    image_opacity: float | None = None


Component = Annotated[
    Union[
        AnnotatedDocumentComponent,
        AnnotatedImageComponent,
        BibliographyComponent,
        BlogComponent,
        ButtonComponent,
        CollectionComponent,
        IIIFViewerComponent,
        ImageComponent,
        ImageGalleryComponent,
        InteractiveChapterTableComponent,
        ItemGalleryComponent,
        MenuComponent,
        MenuItemComponent,
        NColumnsComponent,
        NRowsComponent,
        NetworkGraphComponent,
        TableComponent,
        TextComponent,
        TextImageComponent,
    ],
    Field(discriminator="component"),
]


class WebElement(BaseModel):
    uuid: str
    title: str
    css_styles: list[Style] = []
    tailwind_classes: list[str] = []
    component: Component


"""
Pages and websites
"""


class WebpageProperties(BaseModel):
    displayed_in_header: bool = True
    width: PageWidth = PageWidth.DEFAULT
    variant: str = "default"
    background_image_url: str | None = None
    css_styles: list[Style] = []
    tailwind_classes: list[str] = []


class Webpage(BaseModel):
    title: str
    slug: str
    properties: WebpageProperties = WebpageProperties()
    elements: list[WebElement] = []
    webpages: list["Webpage"] = []


class WebsiteProperties(BaseModel):
    type: WebsiteType
    status: WebsiteStatus
    privacy: WebsitePrivacy = WebsitePrivacy.PUBLIC
    is_header_displayed: bool = True
    is_footer_displayed: bool = True
    is_sidebar_displayed: bool = False
    logo_url: str | None = None
    search_collection_uuid: str | None = None


class WebsiteProject(BaseModel):
    name: str
    website: str | None = None


class Website(BaseModel):
    uuid: str
    publication_datetime: datetime | None = None
    identification: Identification
    project: WebsiteProject
    creators: list[Person] = []
    license: License | None = None
    pages: list[Webpage] = []
    global_elements: list[WebElement] = []
    properties: WebsiteProperties


NColumnsComponent.model_rebuild()
NRowsComponent.model_rebuild()
WebElement.model_rebuild()
Webpage.model_rebuild()
