"""
Employee photo storage: one file per employee under the images directory
"""
import base64
import binascii
import logging
from pathlib import Path, PurePosixPath
from typing import Union

from hrm.core.errors import IOFailure, NotFound, ValidationError

logger = logging.getLogger(__name__)

PHOTO_STEM = "photo"
MIME_TYPES = {
    "png": "image/png",
}
DEFAULT_MIME_TYPE = "image/jpeg"


def _extension_for(image_data: str) -> str:
    """png when the input carries a PNG MIME hint, otherwise jpg"""
    return "png" if "image/png" in image_data else "jpg"


def _strip_data_url(image_data: str) -> str:
    """Drop a "data:<mime>;base64," prefix if present"""
    return image_data.split(",", 1)[1] if "," in image_data else image_data


def _check_segment(epf_number: str) -> str:
    """An EPF number becomes a directory name; it must be a single plain path segment"""
    segment = (epf_number or "").strip()
    if not segment or segment in (".", "..") or "/" in segment or "\\" in segment:
        raise ValidationError(f"Invalid EPF number for image storage: {epf_number!r}")
    return segment


def save_employee_image(
    data_dir: Union[str, Path],
    images_dirname: str,
    epf_number: str,
    image_data: str,
) -> str:
    """
    Decode a base64 image (optionally a data URL) and store it as the employee's photo

    Args:
        data_dir: Application data directory
        images_dirname: Images sub-directory name
        epf_number: Owning employee's key
        image_data: Base64 payload, with or without a data URL prefix

    Returns:
        Path of the stored file relative to data_dir, e.g. "employee_images/E001/photo.jpg"

    Raises:
        ValidationError: Bad EPF number or undecodable payload
        IOFailure: File could not be written
    """
    segment = _check_segment(epf_number)
    try:
        image_bytes = base64.b64decode(_strip_data_url(image_data), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Failed to decode image: {e}") from e

    filename = f"{PHOTO_STEM}.{_extension_for(image_data)}"
    folder = Path(data_dir) / images_dirname / segment
    try:
        folder.mkdir(parents=True, exist_ok=True)
        (folder / filename).write_bytes(image_bytes)
    except OSError as e:
        raise IOFailure(f"Failed to save image: {e}") from e

    relative = PurePosixPath(images_dirname, segment, filename).as_posix()
    logger.info(f"Saved image for employee {segment}: {relative}")
    return relative


def get_employee_image(
    data_dir: Union[str, Path],
    images_dirname: str,
    image_path: str,
) -> str:
    """
    Read a stored photo back as a base64 data URL

    Args:
        data_dir: Application data directory
        images_dirname: Images sub-directory name
        image_path: Path as returned by save_employee_image

    Raises:
        ValidationError: Path points outside the images directory
        NotFound: No file at that path
        IOFailure: File could not be read
    """
    images_root = (Path(data_dir) / images_dirname).resolve()
    full_path = (Path(data_dir) / image_path).resolve()
    try:
        full_path.relative_to(images_root)
    except ValueError:
        raise ValidationError("Invalid image path")

    if not full_path.is_file():
        raise NotFound("Image not found")

    try:
        image_bytes = full_path.read_bytes()
    except OSError as e:
        raise IOFailure(f"Failed to read image: {e}") from e

    mime_type = MIME_TYPES.get(full_path.suffix.lstrip(".").lower(), DEFAULT_MIME_TYPE)
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
