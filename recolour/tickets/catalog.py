"""Static catalog data: style options, reference photos and demo tickets."""

from __future__ import annotations

from urllib.parse import quote

from .models import CreateTicketInput, PhotoOption
from .state import Priority

STYLE_OPTIONS: tuple[str, ...] = (
    "Night Sky - AOP White Dots",
    "Hedge Green - solid",
    "Navy Blazer - solid",
    "Granita - solid",
    "Fuchsia Fedora - AOP Block Libre",
)

CLIPPING_PATH_INSTRUCTION = "Keep clipping path for all pictures (only 1 clipping path)"


def _catalog_photo(photo_id: str, label: str, file_name: str) -> PhotoOption:
    encoded = quote(file_name)
    return PhotoOption(
        id=photo_id,
        label=label,
        file_name=file_name,
        thumbnail_url=f"/api/assets/thumbnails/{encoded}",
        image_url=f"/api/assets/images/{encoded}",
    )


PHOTO_OPTIONS: tuple[PhotoOption, ...] = (
    *(
        _catalog_photo(stem, f"Photo {index}", f"{stem}.jpg")
        for index, stem in enumerate(
            (
                "15377489_5081878_001",
                "15377489_5081878_002",
                "15377489_5081878_007",
                "15377486_5078866_001",
                "15377486_5078866_002",
                "15377486_5078866_007",
                "15377488_5078869_001",
                "15377488_5078869_002",
                "15377488_5078869_007",
                "15377522_5081887_001",
                "15377522_5081887_002",
                "15377522_5081887_007",
            ),
            start=1,
        )
    ),
    _catalog_photo("dots-cloud-dancer", "DOTS CLOUD DANCER", "DOTS CLOUD DANCER.jpg"),
    _catalog_photo("block-libre", "BLOCK LIBRE", "Block Libre.jpg"),
)


def photos(*indexes: int) -> list[PhotoOption]:
    """Pick catalog entries by index."""

    return [PHOTO_OPTIONS[index] for index in indexes]


def seeded_tickets() -> list[CreateTicketInput]:
    """Demo tickets loaded on start-up."""

    return [
        CreateTicketInput(
            style="Granita - solid",
            priority=Priority.MEDIUM,
            partner="Studio Alpha",
            instructions=[
                CLIPPING_PATH_INSTRUCTION,
                "Granita - solid",
                "Fuchsia Fedora with AOP Block Libre",
            ],
            reference_photos=photos(0, 1, 2, 13),
        ),
        CreateTicketInput(
            style="Night Sky - AOP White Dots",
            priority=Priority.HIGH,
            partner="Studio Alpha",
            instructions=[
                CLIPPING_PATH_INSTRUCTION,
                "Night Sky + AOP White Dots (DOTS CLOUD DANCER recoloured to Night Sky)",
                "Hedge Green - solid",
                "Navy Blazer - solid",
            ],
            reference_photos=photos(3, 4, 5, 12),
        ),
        CreateTicketInput(
            style="Navy Blazer - solid",
            priority=Priority.LOW,
            partner="Studio Beta",
            instructions=[
                CLIPPING_PATH_INSTRUCTION,
                "Night Sky + AOP White Dots",
                "Hedge Green - solid",
                "Navy Blazer - solid",
            ],
            reference_photos=photos(6, 7, 8, 12),
        ),
        CreateTicketInput(
            style="Fuchsia Fedora - AOP Block Libre",
            priority=Priority.URGENT,
            partner="Studio Gamma",
            instructions=[
                CLIPPING_PATH_INSTRUCTION,
                "Granita - solid",
                "Fuchsia Fedora with AOP Block Libre",
            ],
            reference_photos=photos(9, 10, 11, 13),
        ),
    ]
