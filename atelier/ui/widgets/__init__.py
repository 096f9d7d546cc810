from atelier.ui.widgets.color_editor import ColorEditor
from atelier.ui.widgets.theme_gallery import ThemeGallery

__all__ = [
    "ColorEditor",
    "ThemeGallery",
]
