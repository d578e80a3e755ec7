from pydantic import BaseModel, Field, field_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class GlobalRedirectRules(BaseModel):
    nonclean_to_clean: bool = True
    deslash: bool = True
    frontpage_redirect: bool = True
    normalize_aliases: bool = True
    term_path_handler: bool = True
    ignore_admin_path: bool = True
    access_check: bool = False


class LanguageRule(BaseModel):
    langcode: str
    prefix: str = ""  # "" for the default language

    @field_validator("prefix")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip("/")


class AliasRule(BaseModel):
    system_path: str
    alias: str
    langcode: str | None = None  # None applies to every language

    @field_validator("system_path", "alias")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip("/")


class RouteRule(BaseModel):
    name: str
    path: str  # e.g. "node/{node}"
    admin: bool = False


class TermRule(BaseModel):
    id: int
    url: str
    vocabulary: str = "tags"


class HostRules(BaseModel):
    front_page: str = "node"
    default_language: str = "en"
    languages: list[LanguageRule] = Field(
        default_factory=lambda: [LanguageRule(langcode="en")]
    )
    aliases: list[AliasRule] = Field(default_factory=list)
    routes: list[RouteRule] = Field(default_factory=list)
    modules: list[str] = Field(default_factory=list)
    terms: list[TermRule] = Field(default_factory=list)
    denied_routes: list[str] = Field(default_factory=list)  # access_check denies these
    maintenance_mode: bool = False


class Rules(BaseModel):
    project: ProjectRules
    globalredirect: GlobalRedirectRules = Field(default_factory=GlobalRedirectRules)
    host: HostRules = Field(default_factory=HostRules)
