"""Release note mining."""

from .resolver import map_prs_to_releases, qualifying_releases

__all__ = ["map_prs_to_releases", "qualifying_releases"]
