import logging
import os
import uuid
import shutil
from dataclasses import dataclass

from fastapi import UploadFile

from app.core.config import settings
from app.core.errors import BadRequest

log = logging.getLogger("uvicorn")

# 📁 Rutas base
MEDIA_DIR = settings.MEDIA_DIR
POSTS_DIR = os.path.join(MEDIA_DIR, "posts")

VIDEO_EXTS = {".mp4", ".m4v", ".mov", ".3gp", ".3gpp", ".webm", ".mkv"}
IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


@dataclass(frozen=True)
class StoredMedia:
    kind: str       # "image" | "video"
    rel_path: str   # p.ej. "posts/abc.mp4"
    url: str        # URL pública que se guarda en el post


def ensure_media_dirs() -> None:
    os.makedirs(POSTS_DIR, exist_ok=True)


def classify_upload(upload: UploadFile) -> str:
    """
    Decide imagen o video por MIME type. Si el navegador no manda un
    content-type útil, se mira la extensión del archivo.
    """
    ct = (upload.content_type or "").lower()
    if ct.startswith("video/"):
        return "video"
    if ct.startswith("image/"):
        return "image"

    ext = os.path.splitext(upload.filename or "")[1].lower()
    if ext in VIDEO_EXTS:
        return "video"
    if ext in IMAGE_EXTS:
        return "image"
    raise BadRequest("Unsupported media type.")


def media_url(rel: str) -> str:
    """Convierte una ruta relativa en la URL pública del host de media."""
    return f"{settings.MEDIA_BASE_URL.rstrip('/')}/{rel}"


def _new_rel(subdir: str, ext: str) -> tuple[str, str]:
    """
    Devuelve (relativa, absoluta) para un archivo nuevo con extensión ext.
    """
    name = f"{uuid.uuid4().hex}{ext}"
    rel = f"{subdir}/{name}"
    abs_path = os.path.join(MEDIA_DIR, rel)
    return rel, abs_path


def save_post_media(file: UploadFile) -> StoredMedia:
    """
    Guarda el adjunto de una publicación en /media/posts tal cual llega.
    """
    kind = classify_upload(file)
    ext = os.path.splitext(file.filename or "")[1].lower()
    allowed = VIDEO_EXTS if kind == "video" else IMAGE_EXTS
    if ext not in allowed:
        ext = ".mp4" if kind == "video" else ".jpg"

    ensure_media_dirs()
    rel, abs_path = _new_rel("posts", ext)
    with open(abs_path, "wb") as out:
        shutil.copyfileobj(file.file, out)
    log.info("media: stored %s %s", kind, rel)
    return StoredMedia(kind=kind, rel_path=rel, url=media_url(rel))


def delete_post_media(rel: str | None) -> None:
    """
    Elimina el archivo físico de una publicación (si existe).
    No lanza error si ya no está.
    """
    if not rel:
        return
    abs_path = os.path.join(MEDIA_DIR, rel)
    try:
        os.remove(abs_path)
    except FileNotFoundError:
        pass
