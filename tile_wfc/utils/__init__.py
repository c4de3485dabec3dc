from .png_export import export_grid_to_png, family_color

__all__ = ['export_grid_to_png', 'family_color']
