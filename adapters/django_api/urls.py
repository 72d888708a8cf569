"""
Library Ledger Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("books", views.books_list_view),
    path("books/add", views.books_add_view),
    path("books/<int:book_id>", views.book_detail_view),
    path("books/<int:book_id>/stock", views.book_stock_view),
    path("books/<int:book_id>/history", views.book_history_view),
    path("members/register", views.members_register_view),
    path("members/<str:address>", views.member_detail_view),
    path("members/<str:address>/history", views.member_history_view),
    path("loans/borrow", views.loans_borrow_view),
    path("loans/return", views.loans_return_view),
    path("loans/history", views.loans_history_view),
    path("stats", views.stats_view),
    path("admin", views.admin_view),
    path("admin/transfer", views.admin_transfer_view),
]
