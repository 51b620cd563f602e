"""Built-in default settings and value coercion for admin writes"""

from typing import Any, Dict

DEFAULT_SETTINGS: Dict[str, Any] = {
    # Feature toggles
    "features.avatars.enabled": True,
    "features.avatars.ai_generation.enabled": True,
    "features.library.enabled": True,
    "features.library.backgrounds.enabled": True,
    "features.library.props.enabled": True,
    "features.scenes.enabled": True,
    "features.scenes.generator.enabled": True,
    "features.projects.enabled": True,
    "features.animation.enabled": True,
    "features.art_director.enabled": True,
    "features.virtual_shoot.enabled": True,
    "features.lighting.enabled": True,
    "features.product_mode.enabled": True,
    # Avatar defaults
    "avatars.default_gender_options": ["Female", "Male", "Neutral"],
    "avatars.default_style_options": ["Casual", "Formal", "Urban", "Sporty"],
    "avatars.default_color_options": [],
    "avatars.default_accent_color": "#FFB400",
    # Library defaults
    "library.backgrounds.default_categories": ["Studio", "Indoor", "Luxury", "Urban"],
    "library.props.default_categories": ["Studio", "Indoor", "Luxury", "Urban"],
    "scenes.default_categories": [
        "All",
        "Studio",
        "Outdoor",
        "Luxury",
        "Indoor",
        "Urban",
        "Nature",
    ],
    "projects.default_types": [
        "All",
        "Product Shoot",
        "Campaign",
        "Ad Creative",
        "Animation",
    ],
    "animation.default_types": ["Fade In", "Slide", "Zoom", "Rotate", "Bounce"],
    "art_director.default_style_categories": [
        "Minimalist",
        "Luxury",
        "Urban",
        "Natural",
        "Industrial",
    ],
    "packs.default_categories": ["All", "Studio", "Lifestyle", "Premium", "Motion"],
    "props.default_categories": ["All", "Furniture", "Plant", "Lighting", "Tech"],
    # Users
    "users.default_credits": 100,
    "users.default_admin_credits": 1000,
    # UI
    "ui.show_beta_features": False,
    "ui.maintenance_mode": False,
    "ui.maintenance_message": (
        "We're currently performing maintenance. Please check back soon."
    ),
    # Product mode
    "product_mode.default_aspect_ratios": ["1:1", "4:5", "16:9", "3:4", "9:16"],
    "product_mode.default_shadow": 40,
    "product_mode.default_reflection": 20,
    "product_mode.allowed_file_types": [
        "image/png",
        "image/jpeg",
        "image/jpg",
        "image/webp",
    ],
    "product_mode.max_file_size_mb": 10,
}


class InvalidSettingValue(ValueError):
    """Raised when a value cannot be stored for a key"""


def get_default_setting(key: str) -> Any:
    """Default value for key, or None when the key is unknown"""
    return DEFAULT_SETTINGS.get(key)


def coerce_setting_value(key: str, value: Any) -> Any:
    """
    Coerce a value written by an admin into the shape its key implies.

    The key name decides the type: toggles become booleans, option and
    category lists must be lists, counters must be non-negative numbers
    and messages become strings. Anything else is stored as given.
    """
    if value is None:
        raise InvalidSettingValue(f"A value is required for '{key}'")

    if ".enabled" in key or "show_" in key or "maintenance_mode" in key:
        return value if isinstance(value, bool) else bool(value)

    if "_options" in key or "_categories" in key or "_types" in key:
        return value if isinstance(value, list) else []

    if "credits" in key or "_count" in key or "_limit" in key:
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        return value if is_number and value >= 0 else 0

    if "message" in key or "_text" in key or "_name" in key:
        return value if isinstance(value, str) else str(value)

    return value
