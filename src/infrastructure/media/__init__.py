# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media storage for uploaded files."""

from src.infrastructure.media.uploader import MediaUploader, UploadOutcome, UploadSource

__all__ = ["MediaUploader", "UploadOutcome", "UploadSource"]
