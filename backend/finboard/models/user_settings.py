from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from finboard.database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, default=dict)
