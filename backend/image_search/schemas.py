from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SearchFilter(BaseModel):
    stars: int = 0  # minimal amount of stars, 0 disables the check
    is_automated: Optional[bool] = None
    is_official: Optional[bool] = None


class SearchOptions(BaseModel):
    filter: SearchFilter = Field(default_factory=SearchFilter)
    limit: int = 0  # must be greater than 0 to override the default of 25
    no_trunc: bool = False
    auth_file: Optional[str] = None
    credentials: Optional[str] = None
    insecure_skip_tls_verify: Optional[bool] = None
    list_tags: bool = False
    timeout: Optional[float] = None


class SearchResult(BaseModel):
    """One image (or tag) found at a registry."""

    model_config = ConfigDict(frozen=True)

    index: str = ""
    name: str
    description: str = ""
    stars: int = 0
    official: str = ""
    automated: str = ""
    tag: str = ""


class SearchRequest(BaseModel):
    term: str = Field(..., min_length=1)
    limit: int = 0
    no_trunc: bool = False
    list_tags: bool = False
    stars: int = 0
    is_automated: Optional[bool] = None
    is_official: Optional[bool] = None
    auth_file: Optional[str] = None
    credentials: Optional[str] = None
    insecure_skip_tls_verify: Optional[bool] = None
    timeout: Optional[float] = Field(default=None, gt=0)

    def to_options(self) -> SearchOptions:
        return SearchOptions(
            filter=SearchFilter(
                stars=self.stars,
                is_automated=self.is_automated,
                is_official=self.is_official,
            ),
            limit=self.limit,
            no_trunc=self.no_trunc,
            auth_file=self.auth_file,
            credentials=self.credentials,
            insecure_skip_tls_verify=self.insecure_skip_tls_verify,
            list_tags=self.list_tags,
            timeout=self.timeout,
        )


class SearchResponse(BaseModel):
    term: str
    results: List[SearchResult]
