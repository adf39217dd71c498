"""Extract documentation chunks from BEAM files and render them as Info."""

from .container import locate_chunk
from .context import DocContext, ModuleResolver
from .errors import (
    BeamDocError,
    ChunkNotFound,
    CorruptContainer,
    NotAContainer,
    UnsupportedVersion,
)
from .loader import decode_documentation, load_documentation
from .models import DocStatus, DocumentationModel, EntityDoc
from .postproc import render
from .projector import pick_doc_language, project, summarize
from .stores import DecodeCache
from .terms import decode_one, decode_root, encode

__all__ = [
    "BeamDocError",
    "ChunkNotFound",
    "CorruptContainer",
    "DecodeCache",
    "DocContext",
    "DocStatus",
    "DocumentationModel",
    "EntityDoc",
    "ModuleResolver",
    "NotAContainer",
    "UnsupportedVersion",
    "decode_documentation",
    "decode_one",
    "decode_root",
    "encode",
    "load_documentation",
    "locate_chunk",
    "pick_doc_language",
    "project",
    "render",
    "summarize",
]
