"""
Basic usage example of fastapi-request-context.

Demonstrates:
- Writing handlers against a RequestContext
- Decoding JSON bodies and form values
- Reporting errors with an early return
"""

from fastapi import FastAPI
from pydantic import BaseModel

from fastapi_request_context import FormKind, RequestContext, context_endpoint

app = FastAPI(title="Basic Request Context Example")

NOTES: dict[int, dict] = {}


class NewNote(BaseModel):
    text: str
    pinned: bool = False


async def list_notes(ctx: RequestContext) -> None:
    """List notes, optionally only pinned ones."""
    pinned = await ctx.decode_form("pinned", FormKind.BOOL, False)
    ctx.encode([n for n in NOTES.values() if n["pinned"] or not pinned])


async def create_note(ctx: RequestContext) -> None:
    """Create a note from a JSON body."""
    note = await ctx.decode(NewNote)
    note_id = len(NOTES) + 1
    NOTES[note_id] = {"id": note_id, **note.model_dump()}
    ctx.encode(NOTES[note_id])


async def get_note(ctx: RequestContext) -> None:
    """Fetch a single note."""
    note_id = int(ctx.request.path_params["note_id"])
    if note_id not in NOTES:
        raise ctx.error(LookupError(f"note {note_id} not found"), 404)
    ctx.encode(NOTES[note_id])


app.add_api_route("/notes", context_endpoint(list_notes), methods=["GET"])
app.add_api_route("/notes", context_endpoint(create_note), methods=["POST"])
app.add_api_route("/notes/{note_id}", context_endpoint(get_note), methods=["GET"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

    # Test with:
    # curl http://localhost:8000/notes
    # curl -d '{"text": "hi", "pinned": true}' http://localhost:8000/notes
    # curl http://localhost:8000/notes?pinned=nope
