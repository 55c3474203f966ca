"""Fantasy-draft standings for elimination-style contests."""

from draftpool.scoring import compute_standings

__all__ = ["compute_standings"]
__version__ = "0.1.0"
