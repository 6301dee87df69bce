"""SchoolsHub Backend.

Line-of-business API for schools: grades, classes, teachers, activity
groups, learners, parents, discipline, events and consent, plus a moderated
business directory.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
