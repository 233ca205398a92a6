from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import get_settings
from .datasources.base import RegistryClient
from .errors import MultiRegistryError, RegistryConfigError, SearchTimeoutError
from .schemas import SearchRequest, SearchResponse
from .services.search_service import SearchService

settings = get_settings()
app = FastAPI(title="Image Search", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# deployments install a concrete client with `app.state.registry_client = ...`
app.state.registry_client = None


def get_registry_client(request: Request) -> RegistryClient:
    client = request.app.state.registry_client
    if client is None:
        raise HTTPException(status_code=503, detail="No registry client configured")
    return client


def get_search_service(client: RegistryClient = Depends(get_registry_client)) -> SearchService:
    return SearchService(client, get_settings())


async def run_search(body: SearchRequest, service: SearchService) -> SearchResponse:
    try:
        results = await service.search(body.term, body.to_options())
    except MultiRegistryError as exc:
        detail = [{"registry": err.registry, "error": str(err.error)} for err in exc.errors]
        raise HTTPException(status_code=502, detail=detail)
    except RegistryConfigError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    except SearchTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc))

    logger.info(f"[api] search term={body.term!r} list_tags={body.list_tags} -> {len(results)} results")
    return SearchResponse(term=body.term, results=results)


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@app.post("/search", response_model=SearchResponse)
async def search(body: SearchRequest, service: SearchService = Depends(get_search_service)):
    return await run_search(body, service)


@app.get("/search", response_model=SearchResponse)
async def search_query(
    term: str = Query(..., min_length=1),
    limit: int = Query(0, ge=0),
    no_trunc: bool = Query(False),
    list_tags: bool = Query(False),
    stars: int = Query(0, ge=0),
    is_automated: Optional[bool] = Query(None),
    is_official: Optional[bool] = Query(None),
    insecure_skip_tls_verify: Optional[bool] = Query(None),
    service: SearchService = Depends(get_search_service),
):
    body = SearchRequest(
        term=term,
        limit=limit,
        no_trunc=no_trunc,
        list_tags=list_tags,
        stars=stars,
        is_automated=is_automated,
        is_official=is_official,
        insecure_skip_tls_verify=insecure_skip_tls_verify,
    )
    return await run_search(body, service)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8020)
