from app.api.routes.extraction import router as extraction_router
from app.api.routes.training_files import router as training_files_router

# Export the routers
extraction = extraction_router
training_files = training_files_router
