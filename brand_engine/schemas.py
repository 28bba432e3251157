from typing import Optional

from pydantic import BaseModel, Field


class ExtractBrandingRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Page URL to extract branding from.")
    download_logo: bool = Field(
        default=False,
        description="Also save the resolved logo under LOGO_OUTPUT_DIR.",
    )


class InferIndustryRequest(BaseModel):
    title: Optional[str] = Field("", description="Page title or product name.")
    description: Optional[str] = Field("", description="Meta description or value proposition.")
