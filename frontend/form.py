import io
from typing import Optional

import streamlit as st
from PIL import Image, UnidentifiedImageError

from backend.config import DEFAULT_IMAGE_MIME_TYPE
from backend.data_url import to_data_url
from backend.models import AnalysisInput, FamilyCategory
from frontend.state import AnalysisState, Loading, can_submit

CONTEXT_PLACEHOLDER = (
    "E.g., Contains 50 visibility parameters, nested families, high detail screws..."
)
UPLOAD_TYPES = ["png", "jpg", "jpeg", "webp"]


def detect_mime_type(raw_bytes: bytes, fallback: str = DEFAULT_IMAGE_MIME_TYPE) -> str:
    """Return the MIME type of the image Pillow sees in ``raw_bytes``."""
    try:
        with Image.open(io.BytesIO(raw_bytes)) as img:
            return Image.MIME.get(img.format, fallback)
    except (UnidentifiedImageError, OSError):
        return fallback


def encode_upload(raw_bytes: bytes, fallback_mime: str = DEFAULT_IMAGE_MIME_TYPE) -> str:
    return to_data_url(raw_bytes, detect_mime_type(raw_bytes, fallback_mime))


def collect_input(
    category: FamilyCategory,
    file_size_mb: float,
    image: Optional[str],
    additional_context: str,
) -> AnalysisInput:
    return AnalysisInput(
        category=category,
        file_size_mb=file_size_mb,
        image=image,
        additional_context=additional_context or "",
    )


def render_form(state: AnalysisState) -> Optional[AnalysisInput]:
    """Draw the analysis form. Returns the submitted input, if any."""
    is_loading = isinstance(state, Loading)

    st.subheader("New Analysis")

    category = st.selectbox(
        "Family Category",
        list(FamilyCategory),
        format_func=lambda c: c.value,
        key="family_category",
        disabled=is_loading,
    )

    file_size = st.number_input(
        "Estimated File Size (MB)",
        min_value=0.1,
        value=0.5,
        step=0.1,
        key="file_size_mb",
        disabled=is_loading,
    )

    uploaded_file = st.file_uploader(
        "Upload 3D View Screenshot (crucial for AI analysis)",
        type=UPLOAD_TYPES,
        key="screenshot",
        disabled=is_loading,
    )

    image = None
    if uploaded_file is not None:
        raw_bytes = uploaded_file.getvalue()
        st.image(raw_bytes, caption="Preview", use_container_width=True)
        image = encode_upload(raw_bytes, uploaded_file.type or DEFAULT_IMAGE_MIME_TYPE)
    else:
        st.caption("Click to upload screenshot (PNG/JPG)")

    context = st.text_area(
        "Additional Context / Parameters (Optional)",
        placeholder=CONTEXT_PLACEHOLDER,
        height=100,
        key="additional_context",
        disabled=is_loading,
    )

    label = "Analyzing Geometry..." if is_loading else "🚀 Analyze Family"
    submitted = st.button(
        label,
        type="primary",
        disabled=not can_submit(state, image is not None),
        use_container_width=True,
    )
    if submitted:
        return collect_input(category, file_size, image, context)
    return None
