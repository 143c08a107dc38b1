from fastapi import APIRouter, Depends

from devmentor.api.deps import get_store
from devmentor.schemas.workspace import CodeProject, UserSession, UserStats
from devmentor.storage.local_store import LocalStore, upsert_project

router = APIRouter(prefix="/workspace", tags=["workspace"])


@router.get("/projects", response_model=list[CodeProject], response_model_by_alias=True)
async def get_projects(store: LocalStore = Depends(get_store)):
    return store.load_projects()


@router.put("/projects", response_model=list[CodeProject], response_model_by_alias=True)
async def put_projects(projects: list[CodeProject], store: LocalStore = Depends(get_store)):
    store.save_projects(projects)
    return projects


@router.post("/projects", response_model=list[CodeProject], response_model_by_alias=True)
async def save_project(project: CodeProject, store: LocalStore = Depends(get_store)):
    projects = upsert_project(store.load_projects(), project)
    store.save_projects(projects)
    return projects


@router.get("/session", response_model=UserSession, response_model_by_alias=True)
async def get_session(store: LocalStore = Depends(get_store)):
    return store.load_session()


@router.put("/session", response_model=UserSession, response_model_by_alias=True)
async def put_session(session: UserSession, store: LocalStore = Depends(get_store)):
    store.save_session(session)
    return session


@router.get("/stats", response_model=UserStats, response_model_by_alias=True)
async def get_stats(store: LocalStore = Depends(get_store)):
    return store.load_stats()


@router.put("/stats", response_model=UserStats, response_model_by_alias=True)
async def put_stats(stats: UserStats, store: LocalStore = Depends(get_store)):
    store.save_stats(stats)
    return stats
