import logging
from typing import List, Optional

from bson.errors import BSONError
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError

from categories import (
    CONTACT,
    GALLERY,
    GALLERY_VIDEOS,
    MONTAGES,
    REVIEW_VIDEOS,
    REVIEWS,
    PortfolioCategory,
    collection_for,
    resolve,
)
from config import LARGE_IMAGE_WARN_MB, LARGE_MEDIA_WARN_MB, PORT
from database import (
    ORDER_ASC,
    delete_by_id,
    find_or_create_singleton,
    get_db,
    insert_document,
    list_documents,
    replace_collection,
    serialize_doc,
    upsert_singleton,
)
from errors import PortfolioError
from logging_config import setup_logging
from schemas import (
    ContactInfo,
    ContactInfoUpdate,
    FilmList,
    GalleryImage,
    GalleryVideo,
    ImageList,
    Montage,
    MontageList,
    Review,
    ReviewSubmission,
    ReviewVideo,
    ReviewVideoList,
    utcnow,
)

setup_logging()
logger = logging.getLogger(__name__)

MB = 1024 * 1024
REVIEW_LIMIT = 6
REVIEW_VIDEO_LIMIT = 12

DEFAULT_CONTACT_INFO = {
    "phone1": "+91 93846 84082",
    "phone2": "",
    "email": "kavithaigalstudio@gmail.com",
    "address": "Tamil Nadu, India",
    "instagram": "https://www.instagram.com/kavithaigal_studio",
    "whatsapp": "https://wa.me/919384684082",
    "mapsUrl": "",
    "workingHours": "Mon – Sat: 9 AM – 7 PM",
}

app = FastAPI(title="Portfolio API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


# Errors are rendered as {"error": message}

@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

@app.exception_handler(PyMongoError)
@app.exception_handler(BSONError)
async def store_error_handler(request: Request, exc: Exception):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request body"
    return JSONResponse(status_code=500, content={"error": message})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.get("/")
def root():
    return {"app": "Portfolio API", "status": "ok"}

@app.get("/test")
def test_database(db: Database = Depends(get_db)):
    response = {
        "backend": "running",
        "database": "connected",
        "collections": [],
    }
    try:
        response["collections"] = db.list_collection_names()
    except PyMongoError as e:
        response["database"] = f"error: {str(e)[:80]}"
    return response


# Admin stats
@app.get("/api/admin/stats")
def admin_stats(db: Database = Depends(get_db)) -> dict:
    return {
        "galleryImages": db[GALLERY].count_documents({}),
        "galleryVideos": db[GALLERY_VIDEOS].count_documents({}),
        "montages": db[MONTAGES].count_documents({}),
        "reviewTexts": db[REVIEWS].count_documents({}),
        "reviewVideos": db[REVIEW_VIDEOS].count_documents({}),
        "portfolioImages": sum(
            db[collection_for(category)].count_documents({}) for category in PortfolioCategory
        ),
    }


# Gallery
@app.get("/api/gallery")
def list_gallery(db: Database = Depends(get_db)) -> List[Optional[str]]:
    return [d.get("imageUrl") for d in list_documents(db[GALLERY], sort=ORDER_ASC)]

@app.post("/api/gallery")
def replace_gallery(payload: ImageList, db: Database = Depends(get_db)) -> dict:
    items = [{"imageUrl": url} for url in payload.images or []]
    replace_collection(db[GALLERY], items, GalleryImage, warn_bytes=LARGE_IMAGE_WARN_MB * MB, size_fields=("imageUrl",))
    return {"message": "Gallery updated successfully"}


# Portfolio categories
@app.get("/api/portfolio/{category}")
def list_portfolio(category: str, db: Database = Depends(get_db)) -> List[Optional[str]]:
    collection = db[resolve(category)]
    return [d.get("imageUrl") for d in list_documents(collection, sort=ORDER_ASC)]

@app.post("/api/portfolio/{category}")
def replace_portfolio(category: str, payload: ImageList, db: Database = Depends(get_db)) -> dict:
    logger.info("Updating portfolio for category: %s", category)
    collection = db[resolve(category)]
    images = payload.images or []
    logger.info("Received %d images for %s", len(images), category)

    items = [{"imageUrl": url} for url in images]
    saved = replace_collection(collection, items, GalleryImage, warn_bytes=LARGE_IMAGE_WARN_MB * MB, size_fields=("imageUrl",))
    logger.info("Saved %d images to %s", saved, category)
    return {"message": f"{category} gallery updated successfully"}


# Montages
@app.get("/api/montages")
def list_montages(db: Database = Depends(get_db)) -> List[dict]:
    return [serialize_doc(d) for d in list_documents(db[MONTAGES], sort=ORDER_ASC)]

@app.post("/api/montages")
def replace_montages(payload: MontageList, db: Database = Depends(get_db)) -> dict:
    montages = payload.montages or []
    logger.info("Updating montages: received %d items", len(montages))
    saved = replace_collection(db[MONTAGES], montages, Montage, warn_bytes=LARGE_MEDIA_WARN_MB * MB, size_fields=("url", "thumb"))
    logger.info("Saved %d montages", saved)
    return {"message": "Montages updated successfully"}


# Reviews
@app.get("/api/reviews")
def list_reviews(db: Database = Depends(get_db)) -> List[dict]:
    docs = list_documents(db[REVIEWS], sort=[("stars", -1), ("createdAt", -1)], limit=REVIEW_LIMIT)
    return [serialize_doc(d) for d in docs]

@app.post("/api/reviews")
def submit_review(payload: ReviewSubmission, db: Database = Depends(get_db)) -> dict:
    insert_document(db[REVIEWS], Review, payload.model_dump())
    return {"message": "Review submitted successfully"}

@app.delete("/api/reviews/{review_id}")
def delete_review(review_id: str, db: Database = Depends(get_db)) -> dict:
    delete_by_id(db[REVIEWS], review_id)
    return {"message": "Review deleted successfully"}


# Review videos
@app.get("/api/review-videos")
def list_review_videos(db: Database = Depends(get_db)) -> List[dict]:
    docs = list_documents(db[REVIEW_VIDEOS], sort=ORDER_ASC, limit=REVIEW_VIDEO_LIMIT)
    return [serialize_doc(d) for d in docs]

@app.post("/api/review-videos")
def replace_review_videos(payload: ReviewVideoList, db: Database = Depends(get_db)) -> dict:
    items = [
        {
            "title": v.get("title") or "",
            "videoUrl": v.get("videoUrl") or v.get("url") or "",
            "thumb": v.get("thumb") or "",
        }
        for v in payload.videos or []
    ]
    replace_collection(db[REVIEW_VIDEOS], items, ReviewVideo)
    return {"message": "Review videos updated successfully"}


# Gallery films
@app.get("/api/gallery-films")
def list_gallery_films(db: Database = Depends(get_db)) -> List[dict]:
    return [serialize_doc(d) for d in list_documents(db[GALLERY_VIDEOS], sort=ORDER_ASC)]

@app.post("/api/gallery-films")
def replace_gallery_films(payload: FilmList, db: Database = Depends(get_db)) -> dict:
    items = [{"title": f.get("title"), "url": f.get("url"), "thumb": f.get("thumb")} for f in payload.films or []]
    replace_collection(db[GALLERY_VIDEOS], items, GalleryVideo)
    return {"message": "Gallery videos saved to dedicated collection successfully"}


# Contact info
@app.get("/api/contact-info")
def get_contact_info(db: Database = Depends(get_db)) -> dict:
    return serialize_doc(find_or_create_singleton(db[CONTACT], ContactInfo, DEFAULT_CONTACT_INFO))

@app.put("/api/contact-info")
def update_contact_info(payload: ContactInfoUpdate, db: Database = Depends(get_db)) -> dict:
    fields = {**payload.model_dump(exclude_unset=True), "updatedAt": utcnow()}
    info, created = upsert_singleton(db[CONTACT], ContactInfo, fields)
    message = "Contact info created successfully" if created else "Contact info updated successfully"
    return {"message": message, "data": serialize_doc(info)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
