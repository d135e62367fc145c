"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from routine_builder.catalog.filters import FilterCriteria, filter_products
from routine_builder.catalog.store import CatalogStore
from routine_builder.chatbot.relay import RelayClient
from routine_builder.chatbot.session import AdvisorSession
from routine_builder.chatbot.state_manager import StateManager
from routine_builder.chatbot.view import NO_DESCRIPTION
from routine_builder.errors import SessionNotFoundError, UnknownProductError
from routine_builder.integrations.clients import build_catalog_source
from routine_builder.utils.config_loader import load_advisor_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Routine Builder API",
    description="Product selection and routine advisor backend",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

advisor_cfg = load_advisor_config()

if os.getenv("CATALOG_URL"):
    advisor_cfg.catalog.source = "http"
    advisor_cfg.catalog.url = os.environ["CATALOG_URL"]
if os.getenv("RELAY_WORKER_URL"):
    advisor_cfg.relay.worker_url = os.environ["RELAY_WORKER_URL"]
if os.getenv("RELAY_MODEL"):
    advisor_cfg.relay.model = os.environ["RELAY_MODEL"]

# Use real Redis when REDIS_URL is set, else the in-memory store
if os.getenv("REDIS_URL") or advisor_cfg.storage.backend == "redis":
    from routine_builder.database.redis_store import RedisKeyValueStore

    kv_store = RedisKeyValueStore(
        url=os.getenv("REDIS_URL") or advisor_cfg.storage.url,
        key_prefix=advisor_cfg.storage.key_prefix,
    )
else:
    from routine_builder.database.kv_store import KeyValueStore

    kv_store = KeyValueStore()

catalog_source = build_catalog_source(advisor_cfg.catalog)
catalog_store = CatalogStore(catalog_source)


def _make_relay() -> RelayClient:
    return RelayClient(
        worker_url=advisor_cfg.relay.worker_url,
        model=advisor_cfg.relay.model,
        timeout_seconds=advisor_cfg.relay.timeout_seconds,
    )


state_manager = StateManager(kv_store, catalog_source, _make_relay)


def get_state_manager() -> StateManager:
    return state_manager


async def get_catalog_store() -> CatalogStore:
    if not catalog_store.loaded:
        await catalog_store.load()
    return catalog_store


def _require_session(manager: StateManager, session_id: str) -> AdvisorSession:
    try:
        return manager.require_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


# ============================================================================
# REQUEST / RESPONSE MODELS
# ============================================================================


class CreateSessionRequest(BaseModel):
    session_id: Optional[str] = Field(default=None, description="Resume the saved state of a previous session")


class FilterRequest(BaseModel):
    category: Optional[str] = ""
    search: Optional[str] = ""


class ChatRequest(BaseModel):
    message: str


class ProductDetails(BaseModel):
    id: Any
    name: str
    brand: str
    description: str


# ============================================================================
# HEALTH
# ============================================================================


@app.get("/", tags=["Health"])
async def root():
    return {"message": "Routine Builder API", "version": "1.0.0", "status": "running"}


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "storage": "connected" if kv_store.ping() else "disconnected",
        "sessions": len(state_manager),
    }


# ============================================================================
# CATALOG
# ============================================================================


@app.get("/api/v1/products", tags=["Products"])
async def api_list_products(
    category: Optional[str] = Query(default=""),
    search: Optional[str] = Query(default=""),
    store: CatalogStore = Depends(get_catalog_store),
) -> Dict[str, Any]:
    criteria = FilterCriteria.from_inputs(category, search)
    products = filter_products(store.products, criteria)
    return {"products": [p.to_dict() for p in products], "count": len(products)}


@app.get("/api/v1/products/categories", tags=["Products"])
async def api_list_categories(store: CatalogStore = Depends(get_catalog_store)) -> Dict[str, List[str]]:
    return {"categories": store.categories()}


@app.get("/api/v1/products/{product_id}", tags=["Products"], response_model=ProductDetails)
async def api_get_product(product_id: str, store: CatalogStore = Depends(get_catalog_store)):
    product = store.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductDetails(
        id=product.id,
        name=product.name,
        brand=product.brand,
        description=product.description or NO_DESCRIPTION,
    )


# ============================================================================
# SESSIONS
# ============================================================================


@app.post("/api/v1/sessions", tags=["Sessions"])
async def create_session(
    request: Optional[CreateSessionRequest] = None,
    manager: StateManager = Depends(get_state_manager),
):
    try:
        session = await manager.create_session((request.session_id if request else None) or None)
        return session.view()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating session: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/sessions/{session_id}", tags=["Sessions"])
async def get_session_state(session_id: str, manager: StateManager = Depends(get_state_manager)):
    return _require_session(manager, session_id).view()


@app.delete("/api/v1/sessions/{session_id}", tags=["Sessions"])
async def end_session(session_id: str, manager: StateManager = Depends(get_state_manager)):
    if not manager.end_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Session ended successfully"}


@app.post("/api/v1/sessions/{session_id}/filters", tags=["Sessions"])
async def set_filters(session_id: str, request: FilterRequest, manager: StateManager = Depends(get_state_manager)):
    try:
        session = _require_session(manager, session_id)
        return await session.set_filters(category=request.category, search=request.search)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error applying filters: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/sessions/{session_id}/products/{product_id}", tags=["Sessions"])
async def get_session_product(session_id: str, product_id: str, manager: StateManager = Depends(get_state_manager)):
    session = _require_session(manager, session_id)
    try:
        return session.product_details(product_id)
    except UnknownProductError:
        raise HTTPException(status_code=404, detail="Product not found")


# ============================================================================
# SELECTION
# ============================================================================


@app.post("/api/v1/sessions/{session_id}/selection/{product_id}", tags=["Selection"])
async def toggle_selection(session_id: str, product_id: str, manager: StateManager = Depends(get_state_manager)):
    session = _require_session(manager, session_id)
    try:
        return session.toggle(product_id)
    except UnknownProductError:
        raise HTTPException(status_code=404, detail="Product not found")


@app.delete("/api/v1/sessions/{session_id}/selection/{product_id}", tags=["Selection"])
async def remove_selection(session_id: str, product_id: str, manager: StateManager = Depends(get_state_manager)):
    session = _require_session(manager, session_id)
    try:
        return session.remove(product_id)
    except UnknownProductError:
        raise HTTPException(status_code=404, detail="Product is not selected")


@app.delete("/api/v1/sessions/{session_id}/selection", tags=["Selection"])
async def clear_selection(session_id: str, manager: StateManager = Depends(get_state_manager)):
    return _require_session(manager, session_id).clear()


# ============================================================================
# CHAT
# ============================================================================


@app.post("/api/v1/sessions/{session_id}/routine", tags=["Chat"])
async def generate_routine(session_id: str, manager: StateManager = Depends(get_state_manager)):
    try:
        session = _require_session(manager, session_id)
        return await session.generate_routine()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating routine: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/sessions/{session_id}/chat", tags=["Chat"])
async def send_chat(session_id: str, request: ChatRequest, manager: StateManager = Depends(get_state_manager)):
    try:
        session = _require_session(manager, session_id)
        return await session.send_chat(request.message)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error processing chat message: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# ============================================================================
# PREFERENCES
# ============================================================================


@app.post("/api/v1/sessions/{session_id}/preferences/rtl", tags=["Preferences"])
async def toggle_rtl(session_id: str, manager: StateManager = Depends(get_state_manager)):
    return _require_session(manager, session_id).toggle_rtl()


@app.on_event("startup")
async def startup_event():
    """Load the shared catalog on startup"""
    logger.info("Starting Routine Builder API...")
    await catalog_store.load()
    logger.info("Catalog ready with %d products", len(catalog_store))


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Routine Builder API...")
