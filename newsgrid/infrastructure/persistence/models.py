# -*- coding: utf-8 -*-
"""
SQLAlchemy модели: инфраструктурный слой.

Схема совпадает с таблицами Supabase: articles, profiles, user_roles,
bookmarks, categories. Политики RLS живут в самой базе; сервисный
доступ приложения проверяет права в application layer.
"""

from datetime import datetime
from sqlalchemy import (
    Column, Computed, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
import uuid

Base = declarative_base()


class ProfileModel(Base):
    """Профиль пользователя. id = id пользователя в Supabase Auth."""

    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=True), primary_key=True)
    first_name = Column(String(255))
    last_name = Column(String(255))
    # Генерируемая колонка, как в Supabase
    full_name = Column(
        Text,
        Computed("trim(coalesce(first_name, '') || ' ' || coalesce(last_name, ''))", persisted=True),
    )

    def __repr__(self):
        return f"<ProfileModel(id={self.id}, full_name='{self.full_name}')>"


class ArticleModel(Base):
    """
    SQLAlchemy модель статьи.

    sources хранится как JSON массив [{type, value, name?}],
    analysis_result - JSON с последними отчётами AI.
    """

    __tablename__ = "articles"

    # =========================================================================
    # Основные поля
    # =========================================================================
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    headline = Column(String(500), nullable=False)
    content = Column(Text)
    excerpt = Column(Text)
    category = Column(String(100), index=True)
    slug = Column(String(600), unique=True, nullable=False, index=True)

    # =========================================================================
    # Статус и тип
    # =========================================================================
    status = Column(String(50), nullable=False, default="draft", index=True)
    article_type = Column(String(50), nullable=False)
    sources = Column(JSON, default=list)

    # =========================================================================
    # Результаты AI
    # =========================================================================
    trust_score = Column(Integer)
    analysis_result = Column(
        JSON,
        default=dict,
        comment="Последние отчёты AI проверки"
    )

    # =========================================================================
    # Метаданные
    # =========================================================================
    author_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), index=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    author = relationship(ProfileModel, lazy="joined")

    def __repr__(self):
        return f"<ArticleModel(id={self.id}, headline='{self.headline[:50]}...')>"


class UserRoleModel(Base):
    __tablename__ = "user_roles"

    user_id = Column(UUID(as_uuid=True), primary_key=True)
    role = Column(String(50), primary_key=True)


class BookmarkModel(Base):
    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("user_id", "article_id", name="uq_bookmarks_user_article"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    article_id = Column(UUID(as_uuid=True), ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(100), unique=True, nullable=False)
