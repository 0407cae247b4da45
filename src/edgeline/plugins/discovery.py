"""Built-in codec discovery.

Every module in ``edgeline.plugins.codecs`` is imported and searched for
concrete BaseEdgeValueCodec subclasses with a non-empty ``name``. Adding a
codec is a matter of dropping a module into that package.
"""

import importlib
import inspect
import logging
from pathlib import Path
from typing import Any

from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.hookspecs import hookimpl

logger = logging.getLogger(__name__)

CODEC_PACKAGE = "edgeline.plugins.codecs"


def discover_codecs(package: str = CODEC_PACKAGE) -> list[type[BaseEdgeValueCodec]]:
    """Import every module of ``package`` and collect its codec classes.

    Scanning is non-recursive and follows file name order. Import errors
    propagate: built-in codecs are our own code.

    Raises:
        ValueError: If two codecs share a name
    """
    root = importlib.import_module(package)
    directory = Path(inspect.getfile(root)).parent

    found: dict[str, type[BaseEdgeValueCodec]] = {}
    for py_file in sorted(directory.glob("*.py")):
        if py_file.name == "__init__.py":
            continue
        for cls in _codecs_in_module(f"{package}.{py_file.stem}"):
            if cls.name in found:
                raise ValueError(
                    f"Duplicate codec name '{cls.name}': defined in both {found[cls.name].__module__} and {cls.__module__}"
                )
            found[cls.name] = cls

    return list(found.values())


def _codecs_in_module(module_name: str) -> list[type[BaseEdgeValueCodec]]:
    module = importlib.import_module(module_name)

    codecs: list[type[BaseEdgeValueCodec]] = []
    for attr, obj in inspect.getmembers(module, inspect.isclass):
        # Imported names belong to the module that defines them
        if obj.__module__ != module.__name__:
            continue
        if not issubclass(obj, BaseEdgeValueCodec) or inspect.isabstract(obj):
            continue
        if not getattr(obj, "name", None):
            logger.warning("Codec class %s in %s has no 'name' attribute - skipping", attr, module_name)
            continue
        codecs.append(obj)
    return codecs


def describe_codec(codec_cls: type[Any]) -> str:
    """First non-empty docstring line, or "<name> codec"."""
    for line in (codec_cls.__doc__ or "").splitlines():
        if line.strip():
            return line.strip()
    return f"{getattr(codec_cls, 'name', codec_cls.__name__)} codec"


class CodecProvider:
    """Hook implementer that contributes a fixed list of codec classes."""

    def __init__(self, codec_classes: list[type[BaseEdgeValueCodec]]) -> None:
        self._codec_classes = list(codec_classes)

    @hookimpl
    def edgeline_get_codecs(self) -> list[type[BaseEdgeValueCodec]]:
        return list(self._codec_classes)

    def __repr__(self) -> str:
        return f"CodecProvider({[cls.name for cls in self._codec_classes]})"
