"""Flow routes."""

from .route import DeleteBySlugRoute


class DeleteFlow(DeleteBySlugRoute):
    """
    Delete a flow by slug.

    Outcomes: ``None`` on 204, ``NotFoundError`` on 404,
    ``UnknownStatusError`` otherwise.
    """

    path_template = "/api/v3/flows/instances/{slug}/"
    object_kind = "flow"
