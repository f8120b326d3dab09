"""Comment endpoints; edits and deletions are owner-or-admin inside the service."""

from __future__ import annotations

from flask import Blueprint, request

from complaints.api.deps import json_response, service_context, timing
from complaints.schemas import CommentInSchema, CommentSchema
from complaints.services.comments.service import CommentService

bp = Blueprint("comments", __name__)

comment_schema = CommentSchema()
comments_schema = CommentSchema(many=True)
comment_in_schema = CommentInSchema()


@bp.get("/tickets/<int:ticket_id>/comments")
@timing
def list_comments(ticket_id: int):
    """
    Comments on a ticket
    ---
    tags:
      - Comments
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      404: { description: Ticket not found }
    """
    items = CommentService(ctx=service_context()).list_for_ticket(ticket_id)
    return json_response({"data": comments_schema.dump(items)})


@bp.post("/tickets/<int:ticket_id>/comments")
@timing
def add_comment(ticket_id: int):
    data = comment_in_schema.load(request.get_json(silent=True) or {})
    item = CommentService(ctx=service_context()).add_comment(ticket_id, data["text"])
    return json_response({"data": comment_schema.dump(item)}, status=201)


@bp.get("/comments/<int:comment_id>")
@timing
def get_comment(comment_id: int):
    item = CommentService(ctx=service_context()).get_comment(comment_id)
    return json_response({"data": comment_schema.dump(item)})


@bp.put("/comments/<int:comment_id>")
@timing
def update_comment(comment_id: int):
    """
    Edit a comment (author or admin)
    ---
    tags:
      - Comments
    security:
      - Bearer: []
    responses:
      200: { description: Updated }
      403: { description: Access Denied }
    """
    data = comment_in_schema.load(request.get_json(silent=True) or {})
    item = CommentService(ctx=service_context()).update_comment(comment_id, data["text"])
    return json_response({"data": comment_schema.dump(item)})


@bp.delete("/comments/<int:comment_id>")
@timing
def delete_comment(comment_id: int):
    CommentService(ctx=service_context()).delete_comment(comment_id)
    return "", 204
