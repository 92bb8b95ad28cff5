"""
Image directive round trip for the visual editor

The visual editor shows a post as a list of draggable images next to a
plain text area. These helpers pull the images out of the source, apply
the editor's operations (resize, reposition, remove) and write the
source back.

The round trip is lossy: images_serialize() puts every image in front of
the text, so the original interleaving of images and text is not kept.
The editor's data model depends on that shape.

Example:
    >>> source = 'Intro\\n\\n![a](http://x/a.png "left")'
    >>> images = images_parse(source)
    >>> images_serialize(images, images_strip(source))
    '![a](http://x/a.png "left")\\n\\nIntro'
"""

from typing import List, Optional, Sequence, Union

from ..config import AppSettings, appsettings
from ..models.content import ImageDirective, ImagePosition, image_copy
from .lexer import IMAGE_RE
from .log import LOG


def images_parse(source: str, settings: Optional[AppSettings] = None) -> List[ImageDirective]:
    """
    Extract every image directive in source order

    Identifiers are assigned per call (img-0, img-1, ...), so the same
    image can get a different id after an edit.

    Args:
        source: Post source
        settings: Optional AppSettings for the initial editor width

    Returns:
        ImageDirective per directive found
    """
    settings = settings or appsettings
    images = []
    for index, match in enumerate(IMAGE_RE.finditer(source)):
        images.append(ImageDirective(
            id=f"img-{index}",
            alt=match.group(1),
            src=match.group(2),
            position=ImagePosition.token_parse(match.group(3)),
            width=settings.image_width_default,
        ))
    LOG(f"Parsed {len(images)} image directives", level=3)
    return images


def images_strip(source: str) -> str:
    """Remove every image directive and trim what is left"""
    return IMAGE_RE.sub('', source).strip()


def images_serialize(images: Sequence[ImageDirective], remainingText: str) -> str:
    """
    Rebuild post source from images and the remaining text

    Each image, in sequence order, is prepended together with a blank line
    separator. The last image of the sequence therefore comes first.

    Args:
        images: Images as held by the editor
        remainingText: Text with the images removed

    Returns:
        Post source
    """
    result = remainingText
    for image in images:
        result = f"{image.markdown_make()}\n\n{result}"
    return result


def image_resize(
    images: Sequence[ImageDirective],
    image_id: str,
    width: int,
    settings: Optional[AppSettings] = None,
) -> List[ImageDirective]:
    """
    Return images with one image's width changed

    The width is clamped to the configured range. Unknown ids leave the
    images unchanged.
    """
    settings = settings or appsettings
    clamped = settings.width_clamp(width)
    return [image_copy(image, width=clamped) if image.id == image_id else image for image in images]


def image_reposition(
    images: Sequence[ImageDirective],
    image_id: str,
    position: Union[ImagePosition, str],
) -> List[ImageDirective]:
    """Return images with one image's position changed"""
    if not isinstance(position, ImagePosition):
        position = ImagePosition.token_parse(position)
    return [image_copy(image, position=position) if image.id == image_id else image for image in images]


def image_remove(images: Sequence[ImageDirective], image_id: str) -> List[ImageDirective]:
    """Return images without the given image"""
    return [image for image in images if image.id != image_id]
