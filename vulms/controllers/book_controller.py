from flask import Blueprint, request, jsonify

from vulms.errors import LibraryError
from vulms.services.book_service import BookService
from vulms.utils.payload import json_error

book_bp = Blueprint("books", __name__)


@book_bp.get("/books")
def list_books():
    books = BookService().list_books(
        search=(request.args.get("search") or "").strip() or None,
        genre=request.args.get("genre") or None,
    )
    return jsonify([b.to_dict() for b in books])


@book_bp.get("/genres")
def list_genres():
    return jsonify(BookService().list_genres())


@book_bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    try:
        return jsonify(BookService().get_book(book_id).to_dict())
    except LibraryError as e:
        return json_error(e)
