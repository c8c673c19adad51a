#app/models/client.py
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

class ClientStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"

class Client(Base):
    """
    Client — заказчик, к которому привязываются проекты и сохранённые доступы.
    Виден только создавшему его пользователю.
    """
    __tablename__ = "clients"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    company_name: str = Column(String(255), nullable=False, index=True)
    contact_person: str = Column(String(255), nullable=True)
    email: str = Column(String(255), nullable=True)
    phone: str = Column(String(64), nullable=True)
    address: str = Column(Text, nullable=True)
    website_url: str = Column(String(512), nullable=True)
    notes: str = Column(Text, nullable=True)
    status: str = Column(String(16), nullable=False, default=ClientStatus.ACTIVE.value)
    created_by_id: int = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    created_by = relationship("User")
    projects = relationship("Project", back_populates="client")
    accesses = relationship("ClientAccess", back_populates="client", cascade="all, delete-orphan", order_by="ClientAccess.created_at")

    def __repr__(self):
        return f"<Client(id={self.id}, company_name='{self.company_name}', status='{self.status}')>"

class ClientAccess(Base):
    """
    ClientAccess — учётные данные клиента (хостинг, FTP, админка...). Пароль хранится зашифрованным.
    """
    __tablename__ = "client_accesses"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    client_id: int = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    access_type: str = Column(String(64), nullable=False, doc="Тип доступа: hosting, ftp, cms...")
    name: str = Column(String(255), nullable=True)
    url: str = Column(String(512), nullable=True)
    username: str = Column(String(255), nullable=True)
    password: str = Column(Text, nullable=True, doc="Пароль (Fernet-шифротекст)")
    port: int = Column(Integer, nullable=True)
    notes: str = Column(Text, nullable=True)
    created_by_id: int = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    client = relationship("Client", back_populates="accesses")
    created_by = relationship("User")
