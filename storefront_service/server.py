"""FastAPI server implementation for the Storefront Service."""

from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from logging_utils.middleware import RequestLoggingMiddleware

from storefront_service.catalog import CatalogQueryService
from storefront_service.config import get_settings
from storefront_service.errors import StoreError, StorefrontError
from storefront_service.inventory import InventoryReservationEngine
from storefront_service.logger import configure_logging, logger
from storefront_service.orders import OrderRecorder
from storefront_service.schemas import Message, OrderCreated, OrderRequest, Product, ReservationRequest
from storefront_service.store import DocumentStore


class StorefrontState:
    """Holds the store connection and the components built on top of it."""

    def __init__(self) -> None:
        self.store = None
        self.catalog: Optional[CatalogQueryService] = None
        self.recorder: Optional[OrderRecorder] = None
        self.inventory: Optional[InventoryReservationEngine] = None

    def configure(
        self,
        store,
        products_collection: str = "Products",
        orders_collection: str = "Orders",
        compensate: bool = False,
    ) -> None:
        """Wire the components to a document store.

        Args:
            store: Object exposing ``collection(name)`` and ``ping()``
            products_collection: Name of the product catalog collection
            orders_collection: Name of the order log collection
            compensate: Release earlier decrements when a reservation fails
        """
        self.store = store
        products = store.collection(products_collection)
        self.catalog = CatalogQueryService(products)
        self.inventory = InventoryReservationEngine(products, compensate=compensate)
        self.recorder = OrderRecorder(store.collection(orders_collection))

    def reset(self) -> None:
        self.__init__()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the document store on startup and close it on shutdown."""
    settings = get_settings()
    configure_logging(settings)
    store = DocumentStore(
        settings.MONGODB_URI,
        settings.DATABASE_NAME,
        timeout_ms=settings.MONGODB_TIMEOUT_MS,
    )
    state.configure(
        store,
        products_collection=settings.PRODUCTS_COLLECTION,
        orders_collection=settings.ORDERS_COLLECTION,
        compensate=settings.RESERVATION_COMPENSATE,
    )
    logger.info(f"Connected to database {settings.DATABASE_NAME}")

    yield

    logger.info("Shutting down storefront service...")
    store.close()
    state.reset()
    logger.info("Shutdown complete")


app = FastAPI(title="Storefront Service", lifespan=lifespan)
router = APIRouter()
state = StorefrontState()

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def documents_response(documents: list[dict]) -> JSONResponse:
    """Serialize stored documents as-is, rendering ObjectIds as hex strings."""
    return JSONResponse(content=jsonable_encoder(documents, custom_encoder={ObjectId: str}))


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError):
    """Log store failures in full but answer with a generic message."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}: {exc.detail!r}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StorefrontError)
async def handle_storefront_error(request: Request, exc: StorefrontError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"message": "invalid request body"})


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check():
    """Check if the service can reach the document store.

    Returns:
        dict: Service readiness status and MongoDB connection status.
    """
    if state.store is not None and await state.store.ping():
        return {"status": "ready", "mongodb": "connected"}
    return {"status": "not ready", "mongodb": "disconnected"}


@router.get("/products", responses={200: {"model": list[Product]}})
async def list_products():
    """Return every product in the catalog."""
    try:
        return documents_response(await state.catalog.list_all())
    except StoreError as e:
        raise StoreError("fetch the products", e.detail) from e


@router.post("/orders", response_model=OrderCreated, status_code=HTTPStatus.CREATED)
async def create_order(payload: OrderRequest):
    """Record an order for a customer.

    Args:
        payload: Customer details, client total and the cart lines

    Returns:
        OrderCreated: Confirmation message and the new order id
    """
    try:
        order_id = await state.recorder.create_order(
            payload.name, payload.phone, payload.totalPrice, payload.order
        )
    except StoreError as e:
        raise StoreError("create the order", e.detail) from e
    return OrderCreated(message="order created successfully!", orderId=str(order_id))


@router.put("/products/updateAvailability", response_model=Message)
async def update_availability(payload: ReservationRequest):
    """Decrement availability for every product in the cart.

    Raises:
        InvalidRequest: Empty or malformed cart (400)
        NotFound: Unknown product id (404)
        InsufficientStock: Not enough units left (400)
    """
    try:
        await state.inventory.reserve(payload.cart)
    except StoreError as e:
        raise StoreError("update product availability", e.detail) from e
    return Message(message="product availability updated successfully!")


@router.get("/search", responses={200: {"model": list[Product]}})
async def search_products(query: Optional[str] = None):
    """Search products by name, location, price or availability.

    Args:
        query: Text to look for; numeric text also matches price and availability
    """
    try:
        return documents_response(await state.catalog.search(query))
    except StoreError as e:
        raise StoreError("search products", e.detail) from e


app.include_router(router)
logger.info("API router mounted.")
