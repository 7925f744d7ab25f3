"""HTTP routes.  Handlers only validate input and call the notebook."""

from flask import Blueprint, jsonify, request

from notepad.exc import ValidationError
from notepad.schemas import FolderCreate, LoginRequest, NoteCreate, parse
from notepad.services.auth import check_credentials
from notepad.state import ApplicationState

api = Blueprint("api", __name__, url_prefix="/api")


@api.post("/login")
def login():
    body = parse(LoginRequest, request.get_json(silent=True))
    check_credentials(body.username, body.password, ApplicationState().settings)
    return jsonify({"success": True})


@api.get("/notes")
def list_notes():
    folder = request.args.get("folder") or request.args.get("folderId")
    notes = ApplicationState().notebook.notes.list(folder=folder)
    return jsonify([note.to_dict() for note in notes])


@api.post("/notes")
def create_note():
    body = parse(NoteCreate, request.get_json(silent=True))
    note = ApplicationState().notebook.notes.create(
        body.title,
        body.content,
        folder=body.folder,
        attachments=[a.model_dump() for a in body.attachments or []],
    )
    return jsonify(note.to_dict()), 201


def parse_note_id(note_id: str) -> int:
    try:
        return int(note_id)
    except ValueError:
        msg = "Invalid ID"
        raise ValidationError(msg) from None


@api.get("/notes/<note_id>")
def get_note(note_id: str):
    note = ApplicationState().notebook.notes.get_or_raise(parse_note_id(note_id))
    return jsonify(note.to_dict())


@api.delete("/notes/<note_id>")
def delete_note(note_id: str):
    ApplicationState().notebook.notes.delete(parse_note_id(note_id))
    return "", 204


@api.get("/folders")
def list_folders():
    names = ApplicationState().notebook.folders.list()
    return jsonify([{"name": name} for name in names])


@api.post("/folders")
def create_folder():
    body = parse(FolderCreate, request.get_json(silent=True))
    name = ApplicationState().notebook.folders.create(body.name)
    return jsonify({"name": name}), 201


@api.delete("/folders/<path:name>")
def delete_folder(name: str):
    ApplicationState().notebook.folders.delete(name)
    return "", 204
