from flask import Blueprint, jsonify

from vulms.errors import LibraryError
from vulms.services.borrow_service import BorrowService
from vulms.services.report_service import ReportService
from vulms.utils.auth import current_identity
from vulms.utils.decorators import login_required
from vulms.utils.payload import json_body, int_field, json_error

transaction_bp = Blueprint("transactions", __name__)


@transaction_bp.post("/borrow")
@login_required
def borrow_book():
    try:
        data = json_body()
        book_id = int_field(data, "bookId")
        loan = BorrowService().borrow(current_identity().user_id, book_id)
    except LibraryError as e:
        return json_error(e)

    return jsonify({
        "message": "Book borrowed successfully",
        "transactionId": loan.id,
        "dueDate": loan.due_date.isoformat(),
    })


@transaction_bp.post("/return")
@login_required
def return_book():
    try:
        data = json_body()
        transaction_id = int_field(data, "transactionId")
        loan = BorrowService().return_book(current_identity().user_id, transaction_id)
    except LibraryError as e:
        return json_error(e)

    return jsonify({"message": "Book returned successfully", "bookTitle": loan.book.title})


@transaction_bp.get("/my-books")
@login_required
def my_books():
    return jsonify(ReportService().my_books(current_identity().user_id))


@transaction_bp.get("/history")
@login_required
def history():
    return jsonify(ReportService().history(current_identity().user_id))
