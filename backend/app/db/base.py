# Import all the models, so that Base has them before being
# imported by Alembic or by Database.create_all()
from app.db.base_class import Base  # noqa

from app.models.employee import Employee  # noqa
