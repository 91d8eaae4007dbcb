"""Stage routes."""

from .route import DeleteBySlugRoute


class DeleteStage(DeleteBySlugRoute):
    """
    Delete a stage of any type by slug.

    Outcomes: ``None`` on 204, ``NotFoundError`` on 404,
    ``UnknownStatusError`` otherwise.
    """

    path_template = "/api/v3/stages/all/{slug}/"
    object_kind = "stage"
