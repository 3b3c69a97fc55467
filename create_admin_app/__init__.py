"""create-admin-app -- scaffolds new epig admin applications.

Usage::

    create-admin-app my-admin-app
    python -m create_admin_app my-admin-app
"""

__version__ = "0.1.0"
