"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.earthquake import MAX_THRESHOLD, MIN_THRESHOLD


# USGS summary feed: all earthquakes, past day
USGS_FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"


@dataclass
class MapSettings:
    """Map image settings.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        padding_px: Padding kept around the fitted markers, in pixels
        tile_url: Tile URL template (None for OpenStreetMap)
        default_latitude: Center latitude when nothing is framed
        default_longitude: Center longitude when nothing is framed
        default_zoom: Zoom level when nothing is framed
    """
    width: int = 800
    height: int = 600
    padding_px: int = 50
    tile_url: str | None = None
    default_latitude: float = 20.0
    default_longitude: float = 0.0
    default_zoom: int = 2


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url: GeoJSON feed to load
        request_timeout_seconds: HTTP timeout, None to wait indefinitely
        min_magnitude: Initial minimum magnitude threshold
        map: Map image settings
    """
    feed_url: str = USGS_FEED_URL
    request_timeout_seconds: float | None = None
    min_magnitude: float = 0.0
    map: MapSettings = field(default_factory=MapSettings)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_map_settings(settings: MapSettings, field_name: str = "map") -> list[ValidationError]:
    """Validate map image settings.

    Pure function.

    Args:
        settings: Map settings to validate
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if settings.width <= 0 or settings.height <= 0:
        errors.append(ValidationError(
            field=f"{field_name}.size",
            message=f"Map size must be positive, got {settings.width}x{settings.height}",
        ))

    if settings.padding_px < 0:
        errors.append(ValidationError(
            field=f"{field_name}.padding_px",
            message=f"Padding must not be negative, got {settings.padding_px}",
        ))
    elif 2 * settings.padding_px >= min(settings.width, settings.height):
        errors.append(ValidationError(
            field=f"{field_name}.padding_px",
            message=f"Padding {settings.padding_px} leaves no room for markers",
            severity="warning",
        ))

    if not 0 <= settings.default_zoom <= 18:
        errors.append(ValidationError(
            field=f"{field_name}.default_zoom",
            message=f"Zoom {settings.default_zoom} out of range [0, 18]",
        ))

    errors.extend(validate_coordinates(
        settings.default_latitude, settings.default_longitude,
        f"{field_name}.default_center",
    ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_url",
            message=f"Feed URL must be http(s), got '{config.feed_url}'",
        ))

    if config.request_timeout_seconds is not None and config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    # Out-of-range thresholds are clamped, so only warn
    if not MIN_THRESHOLD <= config.min_magnitude <= MAX_THRESHOLD:
        errors.append(ValidationError(
            field="min_magnitude",
            message=(
                f"min_magnitude {config.min_magnitude} outside "
                f"[{MIN_THRESHOLD}, {MAX_THRESHOLD}], will be clamped"
            ),
            severity="warning",
        ))

    errors.extend(validate_map_settings(config.map))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
