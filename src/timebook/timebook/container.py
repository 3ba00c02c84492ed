from __future__ import annotations

from dataclasses import dataclass

from .catalog.mysql_catalog_repository import MySQLCatalogRepository
from .catalog.service import CatalogService
from .database.connection import DBConfig, DatabaseConnection
from .entries.dashboard import DashboardService
from .entries.mysql_entry_repository import MySQLTimeEntryRepository
from .entries.service import TimeEntryService
from .management.service import ManagementService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleService
from .team.service import TeamService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AccountService, AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    schedules_repo: MySQLScheduleRepository
    catalog_repo: MySQLCatalogRepository
    entries_repo: MySQLTimeEntryRepository

    auth_service: AuthService
    account_service: AccountService
    schedule_service: ScheduleService
    catalog_service: CatalogService
    time_entry_service: TimeEntryService
    dashboard_service: DashboardService
    management_service: ManagementService
    team_service: TeamService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)
    catalog_repo = MySQLCatalogRepository(conn)
    entries_repo = MySQLTimeEntryRepository(conn)

    catalog_service = CatalogService(catalog_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        schedules_repo=schedules_repo,
        catalog_repo=catalog_repo,
        entries_repo=entries_repo,
        auth_service=AuthService(users_repo),
        account_service=AccountService(users_repo),
        schedule_service=ScheduleService(schedules_repo, users_repo),
        catalog_service=catalog_service,
        time_entry_service=TimeEntryService(entries_repo, catalog_repo),
        dashboard_service=DashboardService(entries_repo, catalog_service),
        management_service=ManagementService(entries_repo, schedules_repo, users_repo),
        team_service=TeamService(users_repo, entries_repo),
    )
