#!/usr/bin/env python3
"""
CLI для обслуживания NewsGrid.

Использование:
    python cli.py db init
    python cli.py categories add "Science"
    python cli.py categories list
    python cli.py admin grant 6c1f...-uuid --role admin
    python cli.py verify 0b7e...-uuid
"""

import asyncio
import logging
from uuid import UUID

import click
from rich.console import Console
from rich.table import Table

from newsgrid.infrastructure.config.settings import get_settings

console = Console()

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@click.group()
@click.option('--verbose', is_flag=True, help='Подробные логи')
def cli(verbose: bool):
    """NewsGrid CLI."""
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


# =============================================================================
# db
# =============================================================================

@cli.group()
def db():
    """Схема базы данных."""
    pass


async def _create_tables():
    from newsgrid.infrastructure.config.database import engine
    from newsgrid.infrastructure.persistence.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    return sorted(Base.metadata.tables)


@db.command('init')
def db_init():
    """Создать таблицы, которых ещё нет."""
    tables = asyncio.run(_create_tables())
    console.print(f"\n✅ [bold green]Схема готова[/bold green]: {', '.join(tables)}\n")


# =============================================================================
# categories
# =============================================================================

@cli.group()
def categories():
    """Справочник категорий."""
    pass


async def _with_session(action):
    from newsgrid.infrastructure.config.database import AsyncSessionLocal, engine

    try:
        async with AsyncSessionLocal() as session:
            return await action(session)
    finally:
        await engine.dispose()


@categories.command('add')
@click.argument('name')
def categories_add(name: str):
    """Добавить категорию."""
    from newsgrid.application.services.profile_service import CategoryService
    from newsgrid.infrastructure.persistence.category_repository_impl import CategoryRepositoryImpl

    async def action(session):
        return await CategoryService(CategoryRepositoryImpl(session)).add(name)

    category = asyncio.run(_with_session(action))
    console.print(f"✅ Категория [bold]{category.category}[/bold] добавлена")


@categories.command('list')
def categories_list():
    """Показать категории."""
    from newsgrid.application.services.profile_service import CategoryService
    from newsgrid.infrastructure.persistence.category_repository_impl import CategoryRepositoryImpl

    async def action(session):
        return await CategoryService(CategoryRepositoryImpl(session)).list_categories()

    names = asyncio.run(_with_session(action))

    table = Table(title="Категории")
    table.add_column("#", style="dim")
    table.add_column("Название", style="cyan")
    for i, name in enumerate(names, start=1):
        table.add_row(str(i), name)
    console.print(table)


# =============================================================================
# admin
# =============================================================================

@cli.group()
def admin():
    """Роли пользователей."""
    pass


@admin.command('grant')
@click.argument('user_id', type=click.UUID)
@click.option('--role', default='admin', show_default=True, help='Роль')
def admin_grant(user_id: UUID, role: str):
    """Выдать роль пользователю."""
    from newsgrid.application.services.admin_service import AdminService
    from newsgrid.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
    from newsgrid.infrastructure.persistence.user_repository_impl import UserRoleRepositoryImpl

    async def action(session):
        service = AdminService(ArticleRepositoryImpl(session), UserRoleRepositoryImpl(session))
        await service.grant_role(user_id, role)

    asyncio.run(_with_session(action))
    console.print(f"✅ Роль [bold]{role}[/bold] выдана {user_id}")


# =============================================================================
# verify
# =============================================================================

@cli.command()
@click.argument('article_id', type=click.UUID)
def verify(article_id: UUID):
    """Запустить AI проверку статьи и показать результат."""
    from newsgrid.application.verification.verification_service import VerificationService
    from newsgrid.domain.services.trust_score import credibility_rating
    from newsgrid.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
    from newsgrid.shared.exceptions import DomainException, InfrastructureException

    async def action(session):
        return await VerificationService(ArticleRepositoryImpl(session)).verify_article(article_id)

    console.print(f"\n🚀 [bold green]Проверка статьи[/bold green] {article_id}\n")
    try:
        outcome = asyncio.run(_with_session(action))
    except (DomainException, InfrastructureException) as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise SystemExit(1)

    table = Table(show_header=False)
    table.add_row("Заголовок", outcome.article.headline)
    table.add_row("Trust Score", str(outcome.trust_score) if outcome.trust_score is not None else "—")
    table.add_row("Рейтинг", credibility_rating(outcome.trust_score) or "—")
    table.add_row("Статус", outcome.status.value)
    console.print(table)

    if not outcome.decided:
        console.print("[yellow]⚠️  В отчёте нет оценки, статья осталась на проверке[/yellow]\n")


if __name__ == '__main__':
    cli()
