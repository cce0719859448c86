"""Foundation shade catalog."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Shade:
    """A foundation shade and its display color."""

    sku: str
    name: str
    hex: str
    undertone: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


CATALOG: tuple[Shade, ...] = (
    Shade("30W", "30 Warm", "#e8c5a7", "warm"),
    Shade("40N", "40 Neutral", "#deba95", "neutral"),
    Shade("50N", "50 Neutral", "#d6b28f", "neutral"),
    Shade("60C", "60 Cool", "#d9a781", "cool"),
    Shade("80N", "80 Neutral", "#daa981", "neutral"),
    Shade("100N", "100 Neutral", "#e3b287", "neutral"),
    Shade("110W", "110 Warm", "#dfb382", "warm"),
    Shade("120W", "120 Warm", "#d9ae8b", "warm"),
    Shade("180C", "180 Cool", "#daab7d", "cool"),
    Shade("220N", "220 Neutral", "#d7a372", "neutral"),
    Shade("240N", "240 Neutral", "#c98d61", "neutral"),
    Shade("280N", "280 Neutral", "#d9ad7c", "neutral"),
    Shade("325C", "325 Cool", "#d7a77c", "cool"),
    Shade("330W", "330 Warm", "#d49353", "warm"),
    Shade("340N", "340 Neutral", "#e0b27f", "neutral"),
    Shade("380N", "380 Neutral", "#e5b481", "neutral"),
    Shade("400N", "400 Neutral", "#d4a074", "neutral"),
    Shade("440W", "440 Warm", "#ca8859", "warm"),
    Shade("460N", "460 Neutral", "#d8a472", "neutral"),
    Shade("470W", "470 Warm", "#bf804c", "warm"),
    Shade("480C", "480 Cool", "#d6976b", "cool"),
    Shade("485N", "485 Neutral", "#c47a40", "neutral"),
    Shade("490N", "490 Neutral", "#b8835b", "neutral"),
    Shade("500W", "500 Warm", "#b66d3d", "warm"),
    Shade("540W", "540 Warm", "#bc713d", "warm"),
    Shade("550W", "550 Warm", "#b3662a", "warm"),
    Shade("555W", "555 Warm", "#b76629", "warm"),
    Shade("560N", "560 Neutral", "#b47141", "neutral"),
    Shade("600N", "600 Neutral", "#b06733", "neutral"),
    Shade("610W", "610 Warm", "#9d5629", "warm"),
    Shade("620C", "620 Cool", "#995028", "cool"),
    Shade("640W", "640 Warm", "#965430", "warm"),
    Shade("720N", "720 Neutral", "#652f18", "neutral"),
)


def catalog_skus(catalog: tuple[Shade, ...] = CATALOG) -> set[str]:
    """Return the set of SKUs in a catalog."""
    return {shade.sku for shade in catalog}


def find_shade(sku: str, catalog: tuple[Shade, ...] = CATALOG) -> Shade | None:
    """Look up a shade by SKU."""
    for shade in catalog:
        if shade.sku == sku:
            return shade
    return None
