from .user import User
from .client import Client, ClientAccess
from .project import Project, ProjectMember, Section
from .task import Task, TaskAssignment
from .comment import Comment, Mention
from .time_entry import TimeEntry
from .custom_field import CustomField, CustomFieldValue
from .notification import Notification

# додай тут всі свої моделі!
