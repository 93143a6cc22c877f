"""
Hosted image reference.
"""
from pydantic import BaseModel, Field


class UploadedImage(BaseModel):
    """Result of storing an image on the image host."""
    image_url: str = Field(..., description="Public (secure) URL of the stored image")
    image_public_id: str = Field(..., description="Handle used to delete the image later")
