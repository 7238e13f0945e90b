import click
from flask import Blueprint, current_app
from werkzeug.security import generate_password_hash

from vulms.db_objects import ensure_db_objects
from vulms.extensions import db
from vulms.models.book import Book
from vulms.models.user import User
from vulms.repositories.book_repo import BookRepo
from vulms.repositories.user_repo import UserRepo

cli_bp = Blueprint("cli", __name__, cli_group=None)

SAMPLE_USERS = [
    ("admin", "admin@univen.ac.za", "admin123", "admin"),
    ("student1", "student1@univen.ac.za", "student123", "student"),
    ("student2", "student2@univen.ac.za", "student123", "student"),
]

SAMPLE_BOOKS = [
    ("Introduction to Computer Science", "John Smith", "Computer Science", "978-0123456789"),
    ("Advanced JavaScript", "Jane Doe", "Computer Science", "978-0987654321"),
    ("Physics Fundamentals", "Albert Einstein", "Physics", "978-0111222333"),
    ("Artificial Intelligence Basics", "Alan Turing", "AI", "978-0444555666"),
    ("Database Systems", "Edgar Codd", "Computer Science", "978-0777888999"),
    ("Quantum Mechanics", "Max Planck", "Physics", "978-0333444555"),
    ("Machine Learning Introduction", "Geoffrey Hinton", "AI", "978-0666777888"),
    ("Web Development Mastery", "Tim Berners-Lee", "Computer Science", "978-0999000111"),
    ("Mathematics for Engineers", "Isaac Newton", "Mathematics", "978-0222333444"),
    ("Data Structures and Algorithms", "Donald Knuth", "Computer Science", "978-0555666777"),
]


def seed_sample_data():
    """Insert the sample accounts and books; rows that already exist are left alone."""
    users = UserRepo()
    books = BookRepo()
    added_users = added_books = 0

    for username, email, password, role in SAMPLE_USERS:
        if users.get_by_username(username) or users.get_by_email(email):
            continue
        db.session.add(User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        ))
        added_users += 1

    for title, author, genre, isbn in SAMPLE_BOOKS:
        if books.get_by_isbn(isbn):
            continue
        db.session.add(Book(
            title=title,
            author=author,
            genre=genre,
            isbn=isbn,
            total_copies=1,
            available_copies=1,
            available=True,
        ))
        added_books += 1

    db.session.commit()
    return added_users, added_books


@cli_bp.cli.command("init-db")
@click.option("--seed", is_flag=True, help="Also insert sample users and books.")
def init_db(seed):
    """Create the tables and the active-loan index."""
    ensure_db_objects(current_app._get_current_object(), create_tables=True)
    click.echo("Database initialized.")

    if seed:
        added_users, added_books = seed_sample_data()
        click.echo(f"Seeded {added_users} users and {added_books} books.")
        click.echo("Admin: admin@univen.ac.za / admin123")
        click.echo("Student: student1@univen.ac.za / student123")
