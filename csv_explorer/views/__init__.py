from .group_count_view import GroupCountView

__all__ = ["GroupCountView"]
