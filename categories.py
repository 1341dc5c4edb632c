from enum import Enum

from errors import CategoryNotFound

# Collection names are kept as they exist in the Portfolio database
GALLERY = "gallary"
MONTAGES = "montages"
REVIEWS = "Reviews"
REVIEW_VIDEOS = "ReviewVideos"
GALLERY_VIDEOS = "Gallary video"
CONTACT = "contact"


class PortfolioCategory(str, Enum):
    PORTRAITS = "Portraits"
    PRE_WEDDINGS = "Pre Weddings"
    WEDDINGS = "Weddings"
    RECEPTION = "Reception"
    MODEL_SHOOT = "Model Shoot"
    ENGAGEMENT = "Engagement"


_CATEGORY_COLLECTIONS = {
    PortfolioCategory.PORTRAITS: "portait",
    PortfolioCategory.PRE_WEDDINGS: "pre wedding",
    PortfolioCategory.WEDDINGS: "wedding",
    PortfolioCategory.RECEPTION: "resiption",
    PortfolioCategory.MODEL_SHOOT: "model shoot",
    PortfolioCategory.ENGAGEMENT: "engaement",
}


def collection_for(category: PortfolioCategory) -> str:
    return _CATEGORY_COLLECTIONS[category]


def resolve(key: str) -> str:
    """Map a category key such as ``"Pre Weddings"`` to its collection name."""
    try:
        category = PortfolioCategory(key)
    except ValueError:
        raise CategoryNotFound() from None
    return collection_for(category)
