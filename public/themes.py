"""Microsite theme catalogue. A property stores only the theme id."""
from django.conf import settings

THEMES = {
    "beach": {
        "id": "beach",
        "name": "Coastal Escape",
        "tagline": "Sun, sand & serenity",
        "description": "Light, airy layouts with ocean-inspired colors. Features horizontal flow, "
                       "full-width imagery, and breezy typography.",
        "preview_gradient": "linear-gradient(135deg, #87CEEB, #F5DEB3)",
        "fonts": {"heading": "Playfair Display", "body": "Inter"},
        "layout": "classic",
    },
    "mountain": {
        "id": "mountain",
        "name": "Alpine Retreat",
        "tagline": "Peaks & tranquility",
        "description": "Bold, dramatic layouts with deep earth tones. Features strong vertical elements, "
                       "layered cards, and rugged textures.",
        "preview_gradient": "linear-gradient(135deg, #4A5568, #718096)",
        "fonts": {"heading": "Playfair Display", "body": "Inter"},
        "layout": "bold",
    },
    "forest": {
        "id": "forest",
        "name": "Woodland Haven",
        "tagline": "Nature's embrace",
        "description": "Organic, immersive layouts with lush greens. Features asymmetric grids, "
                       "natural borders, and earthy warmth.",
        "preview_gradient": "linear-gradient(135deg, #2D5016, #4A7C23)",
        "fonts": {"heading": "Playfair Display", "body": "Inter"},
        "layout": "editorial",
    },
    "backwater": {
        "id": "backwater",
        "name": "Tranquil Waters",
        "tagline": "Calm & connected",
        "description": "Serene, flowing layouts with water-inspired palettes. Features horizontal "
                       "scrolling sections and reflective imagery.",
        "preview_gradient": "linear-gradient(135deg, #1E4D4D, #3D8B8B)",
        "fonts": {"heading": "Playfair Display", "body": "Inter"},
        "layout": "minimal",
    },
    "adventure": {
        "id": "adventure",
        "name": "Wild Explorer",
        "tagline": "Thrill & discovery",
        "description": "Dynamic, energetic layouts with bold contrasts. Features diagonal elements, "
                       "action-focused imagery, and vibrant accents.",
        "preview_gradient": "linear-gradient(135deg, #D97706, #DC2626)",
        "fonts": {"heading": "Playfair Display", "body": "Inter"},
        "layout": "dynamic",
    },
}

THEME_LIST = list(THEMES.values())
THEME_CHOICES = [(theme["id"], theme["name"]) for theme in THEME_LIST]


def get_theme(theme_id):
    """Theme config for ``theme_id``, falling back to the default theme."""
    return THEMES.get(theme_id) or THEMES[settings.DEFAULT_THEME]


def is_valid_theme(theme_id):
    return theme_id in THEMES
