# webcommon/models/__init__.py
from webcommon.models.base import Base

# Import every module that defines mapped classes
from webcommon.models.notice import Notice
