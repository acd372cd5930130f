"""
Services Package

Exports all services for easy importing.
"""

from portfolio.services.ordering import (
    ShiftOperation, shift_order, reorder_rows, next_order, insert_row, move_row, delete_row
)
from portfolio.services.batch import atomic, chunked
from portfolio.services.thumbnail import upload_thumbnail
from portfolio.services.backup import build_export, download_backup, export_filename, BackupError

__all__ = [
    'ShiftOperation',
    'shift_order',
    'reorder_rows',
    'next_order',
    'insert_row',
    'move_row',
    'delete_row',
    'atomic',
    'chunked',
    'upload_thumbnail',
    'build_export',
    'download_backup',
    'export_filename',
    'BackupError',
]
