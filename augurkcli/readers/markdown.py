import base64
import re
from pathlib import Path
from beartype.typing import Callable, Optional, Union

from PIL import Image, UnidentifiedImageError

from augurkcli.constants import FAULT_MAPPING

IMAGE_REFERENCE = re.compile(r'!\[.*?\]\((?P<file>.+?)(?: ".+?")?\)')


def embed_images(
    markdown: str,
    base_path: Union[str, Path, None] = None,
    warn: Optional[Callable[[str], None]] = None,
) -> str:
    """Replaces the path of every local image referenced in the markdown with a data URI (RFC 2397).

    Paths are resolved against base_path, or the current working directory when it is not given.
    References to remote images, files that do not exist and files that are not images are left as they are.

    :param markdown: markdown text
    :param base_path: directory relative image paths are resolved against
    :param warn: called with a message for every reference that could not be embedded
    :return: markdown with the images embedded
    """
    if not markdown:
        return markdown

    base_path = Path(base_path) if base_path is not None else Path.cwd()
    result = markdown
    offset = 0
    for match in IMAGE_REFERENCE.finditer(markdown):
        file_reference = match.group("file")
        data_uri = _image_data_uri(file_reference, base_path, warn)
        if data_uri is None:
            continue

        start = match.start("file") + offset
        end = match.end("file") + offset
        result = f"{result[:start]}{data_uri}{result[end:]}"
        # Later matches were found in the original markdown
        offset += len(data_uri) - len(file_reference)

    return result


def _image_data_uri(file_reference: str, base_path: Path, warn: Optional[Callable[[str], None]]) -> Optional[str]:
    if "://" in file_reference or file_reference.startswith("data:"):
        return None

    try:
        image_path = base_path / file_reference
        if not image_path.is_file():
            return None
        with Image.open(image_path) as image:
            mime_type = image.get_format_mimetype()
        content = image_path.read_bytes()
    except UnidentifiedImageError:
        _warn(warn, file_reference, "the file is not a recognized image")
        return None
    except (OSError, ValueError) as e:
        _warn(warn, file_reference, str(e))
        return None

    if not mime_type:
        _warn(warn, file_reference, "unable to determine the mime type")
        return None

    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def _warn(warn: Optional[Callable[[str], None]], path: str, reason: str):
    if warn is not None:
        warn(FAULT_MAPPING["image_not_embedded"].format(path=path, reason=reason))


def trim_line_start(text: str, separator: str = "\n") -> str:
    """Removes the leading whitespace of every line, keeping the line separators as they are"""
    if not text:
        return text
    return separator.join(line.lstrip() for line in text.split(separator))
