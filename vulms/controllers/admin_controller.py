from flask import Blueprint, jsonify

from vulms.errors import LibraryError
from vulms.services.book_service import BookService
from vulms.services.borrow_service import BorrowService
from vulms.services.notification_service import NotificationService
from vulms.services.report_service import ReportService
from vulms.utils.decorators import admin_required
from vulms.utils.payload import json_body, int_field, json_error

admin_bp = Blueprint("admin", __name__)


@admin_bp.get("/stats")
@admin_required
def stats():
    return jsonify(ReportService().stats())


@admin_bp.get("/transactions")
@admin_required
def transactions():
    return jsonify(ReportService().all_transactions())


@admin_bp.get("/overdue")
@admin_required
def overdue():
    return jsonify(ReportService().overdue())


@admin_bp.post("/books")
@admin_required
def add_book():
    try:
        data = json_body()
        book = BookService().create_book(data)
    except LibraryError as e:
        return json_error(e)

    return jsonify({"message": "Book added successfully", "bookId": book.id, "book": book.to_dict()})


@admin_bp.post("/return")
@admin_required
def return_on_behalf():
    try:
        data = json_body()
        transaction_id = int_field(data, "transactionId")
        loan = BorrowService().admin_return(transaction_id)
    except LibraryError as e:
        return json_error(e)

    return jsonify({
        "message": "Book returned successfully",
        "bookTitle": loan.book.title,
        "username": loan.user.username,
    })


@admin_bp.post("/run-overdue-check")
@admin_required
def run_overdue_check():
    counts = NotificationService().send_overdue_reminders()
    return jsonify({"message": "Overdue check completed", **counts})
