from leadhub.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from leadhub.app.models.user import User  # noqa: F401
from leadhub.app.models.organization import Organization  # noqa: F401
from leadhub.app.models.lead import Lead  # noqa: F401
from leadhub.app.models.note import Note  # noqa: F401
from leadhub.app.models.engagement import Engagement  # noqa: F401
from leadhub.app.models.timeline import TimelineEvent  # noqa: F401
