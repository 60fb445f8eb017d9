# /examcell/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# Importing them here makes sure `Base.metadata` knows every table before
# `create_all` runs at startup.

from .base_class import Base

from .models.user_models import Admin
from .models.academic_models import Student, Subject, Result
from .models.upload_models import Upload
