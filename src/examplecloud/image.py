"""Image service resource operations."""

from __future__ import annotations

from .endpoints import Service
from .resource import RawContent, ServiceResource
from .schemas.common import Envelope, parse, to_body
from .schemas.image import CreateISOImageRequest, Image, ImageQuota, ImageUsage

_IMAGE = Envelope("image", Image)
_QUOTA = Envelope("quota", ImageQuota)
_USAGE = Envelope("images", ImageUsage)


class ImageResource(ServiceResource):
    """Images, ISO uploads and image storage quota."""

    service = Service.IMAGE

    def list_images(
        self,
        *,
        limit: int | None = None,
        marker: str | None = None,
        visibility: str | None = None,
        os_type: str | None = None,
        sort: str | None = None,
        sort_key: str | None = None,
        sort_dir: str | None = None,
        name: str | None = None,
        status: str | None = None,
    ) -> list[Image]:
        """List images.

        Args:
            limit: Page size.
            marker: Last image id of the previous page.
            visibility: ``public`` or ``shared``.
            os_type: ``linux`` or ``windows``.
            sort: Combined sort expression, e.g. ``name:asc``.
            sort_key: Sort attribute.
            sort_dir: ``asc`` or ``desc``.
            name: Exact name filter.
            status: Status filter.

        Returns:
            list[Image]: One page of images.
        """
        params = {
            "limit": limit,
            "marker": marker,
            "visibility": visibility,
            "os_type": os_type,
            "sort": sort,
            "sort_key": sort_key,
            "sort_dir": sort_dir,
            "name": name,
            "status": status,
        }
        return _IMAGE.unwrap_list(self._request("GET", "/images", params=params))

    def get_image(self, image_id: str) -> Image:
        return parse(Image, self._request("GET", f"/images/{image_id}"))

    def delete_image(self, image_id: str) -> None:
        self._request("DELETE", f"/images/{image_id}")

    def get_image_quota(self) -> ImageQuota:
        return _QUOTA.unwrap(self._request("GET", "/quota"))

    def set_image_quota(self, image_size: str) -> ImageQuota:
        """Change the image storage quota, e.g. ``"550GB"``."""
        body = _QUOTA.wrap({"image_size": image_size})
        return _QUOTA.unwrap(self._request("PUT", "/quota", body=body))

    def get_image_usage(self) -> ImageUsage:
        return _USAGE.unwrap(self._request("GET", "/images/total"))

    def create_iso_image(self, name: str) -> Image:
        """Register an ISO image entry; upload its bytes with :meth:`upload_iso_image`."""
        body = to_body(CreateISOImageRequest(name=name))
        return parse(Image, self._request("POST", "/images", body=body))

    def upload_iso_image(self, image_id: str, data: RawContent) -> None:
        """Upload ISO bytes; iterables and binary file objects are streamed."""
        self._raw(
            "PUT",
            f"/images/{image_id}/file",
            headers={"Content-Type": "application/octet-stream"},
            content=data,
            accept_json=False,
        )
