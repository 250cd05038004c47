from pydantic import BaseModel, Field
from typing import Any, Dict, List, NamedTuple, Optional


class DefinitionKey(NamedTuple):
    """Identity of a definition: the import path of its home package and its bare name."""
    package_path: str
    name: str

    def __str__(self) -> str:
        return f"{self.package_path}.{self.name}"


# Package index records

class PackageInfo(BaseModel):
    """
    One Go package of the analyzed source tree.

    `imports` maps each imported path to the aliases it is referenced by
    inside this package, in discovery order.
    """
    import_path: str
    name: str
    directory: str
    files: List[str] = Field(default_factory=list)
    imports: Dict[str, List[str]] = Field(default_factory=dict)


# Type records

class MemberRecord(BaseModel):
    """
    A field of a struct definition.
    """
    exported_name: str
    serialized_name: str
    type_name: str
    is_embedded: bool = False
    # Home package of a member promoted out of an embedded type
    override_package_path: Optional[str] = None
    description: str = ""
    required: bool = False


class LocatedType(BaseModel):
    """
    The declaration shape of a named type as found in source.

    Structs carry members; other named types carry their `underlying` type text.
    """
    name: str
    package_path: str
    package_name: str
    members: List[MemberRecord] = Field(default_factory=list)
    underlying: Optional[str] = None
    is_enum_candidate: bool = False


class DefinitionRecord(BaseModel):
    """
    The canonical, resolved shape of one named type.
    """
    name: str
    package_path: str
    package_name: str
    members: List[MemberRecord] = Field(default_factory=list)
    embedded_type_names: List[str] = Field(default_factory=list)
    enum_values: Optional[List[Any]] = None
    underlying: Optional[str] = None

    @property
    def key(self) -> DefinitionKey:
        return DefinitionKey(self.package_path, self.name)


# Annotation records

class Section(BaseModel):
    """
    A titled block of an annotation comment, e.g. "OpenAPI Path:" and its body.
    """
    title: str
    body: str = ""

    def lines(self) -> List[str]:
        """Body lines, stripped, blank lines excluded."""
        return [line.strip() for line in self.body.splitlines() if line.strip()]

    def line(self, index: int) -> Optional[str]:
        lines = self.lines()
        if index >= len(lines):
            return None
        return lines[index]


class Parameter(BaseModel):
    """
    An operation parameter. `package_path`/`package_name` are filled in once
    the parameter type has been resolved.
    """
    name: str
    location: str
    type_name: str
    required: bool = False
    description: str = ""
    package_path: Optional[str] = None
    package_name: Optional[str] = None


class Response(BaseModel):
    """
    An operation response.
    """
    status_code: int
    type_name: str = "nil"
    success: bool = True
    description: str = ""
    package_path: Optional[str] = None
    package_name: Optional[str] = None


class Operation(BaseModel):
    """
    A path/method pair scraped from one annotation comment block.
    """
    path: str = ""
    method: str = ""
    summary: str = ""
    description: str = ""
    accepts: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    # Package the comment block was found in
    package_path: str = ""
    parameters: List[Parameter] = Field(default_factory=list)
    responses: List[Response] = Field(default_factory=list)


class ApiInfo(BaseModel):
    """
    Document-level information, condensed from every API comment block.
    """
    title: str = ""
    version: str = ""
    description: str = ""
    base_path: str = ""


class Tag(BaseModel):
    name: str
    description: str = ""


class ScrapeResult(BaseModel):
    """
    Everything the annotation scraper found in a source tree.
    """
    api: ApiInfo = Field(default_factory=ApiInfo)
    operations: List[Operation] = Field(default_factory=list)
    tags: List[Tag] = Field(default_factory=list)
