"""Implementation of the repositories using SQLAlchemy"""

from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from taletrail.core.models import (
    GameModel,
    GameTemplateModel,
    RouteInfo,
    UserId,
    UserProfileModel,
)
from taletrail.db.schema import DBGame, DBGameTemplate, DBUserProfile

# Columns of DBGame that a partial update may touch
UPDATABLE_GAME_COLUMNS = frozenset(
    {
        "title",
        "theme",
        "city",
        "difficulty",
        "estimated_duration",
        "pub_count",
        "puzzles_per_pub",
        "content",
        "location_placeholders",
        "route_info",
    }
)


def route_info_to_json(route_info: RouteInfo) -> dict[str, Any]:
    return {
        "totalDistance": route_info.total_distance,
        "totalTime": route_info.total_time,
        "isValid": route_info.is_valid,
    }


def route_info_from_json(data: Optional[dict[str, Any]]) -> RouteInfo | None:
    if not data:
        return None
    return RouteInfo(
        total_distance=data.get("totalDistance", ""),
        total_time=data.get("totalTime", ""),
        is_valid=bool(data.get("isValid", False)),
    )


class SQLGameRepository:
    """Games stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def list_games(self, user_id: UserId) -> list[GameModel]:
        query = (
            select(DBGame)
            .where(DBGame.user_id == user_id)
            .order_by(DBGame.created_at.desc())
        )
        return [self._to_model(game_db) for game_db in self.db.scalars(query)]

    def search_games(self, user_id: UserId, query: str) -> list[GameModel]:
        pattern = f"%{query}%"
        statement = (
            select(DBGame)
            .where(DBGame.user_id == user_id)
            .where(
                or_(
                    DBGame.title.ilike(pattern),
                    DBGame.city.ilike(pattern),
                    DBGame.theme.ilike(pattern),
                )
            )
            .order_by(DBGame.created_at.desc())
        )
        return [self._to_model(game_db) for game_db in self.db.scalars(statement)]

    def get_game(self, game_id: UUID, user_id: UserId) -> GameModel | None:
        game_db = self._fetch_game(game_id, user_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> GameModel:
        game_db = DBGame(
            id=uuid4(),
            user_id=game.user_id,
            title=game.title,
            theme=game.theme,
            city=game.city,
            difficulty=game.difficulty,
            estimated_duration=game.estimated_duration,
            pub_count=game.pub_count,
            puzzles_per_pub=game.puzzles_per_pub,
            content=game.content,
            location_placeholders=game.location_placeholders,
            route_info=route_info_to_json(game.route_info) if game.route_info else None,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def update_game(
        self, game_id: UUID, user_id: UserId, changes: dict[str, Any]
    ) -> GameModel | None:
        game_db = self._fetch_game(game_id, user_id)
        if not game_db:
            return None
        for column, value in changes.items():
            if column not in UPDATABLE_GAME_COLUMNS:
                raise KeyError(f"Column {column!r} cannot be updated.")
            if isinstance(value, RouteInfo):
                value = route_info_to_json(value)
            setattr(game_db, column, value)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def update_route_info(
        self, game_id: UUID, user_id: UserId, route_info: RouteInfo
    ) -> bool:
        game_db = self._fetch_game(game_id, user_id)
        if not game_db:
            return False
        game_db.route_info = route_info_to_json(route_info)
        self.db.commit()
        return True

    def delete_game(self, game_id: UUID, user_id: UserId) -> bool:
        game_db = self._fetch_game(game_id, user_id)
        if not game_db:
            return False
        self.db.delete(game_db)
        self.db.commit()
        return True

    def _fetch_game(self, game_id: UUID, user_id: UserId) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id, DBGame.user_id == user_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            id=game_db.id,
            user_id=game_db.user_id,
            title=game_db.title,
            theme=game_db.theme,
            city=game_db.city,
            difficulty=game_db.difficulty,
            estimated_duration=game_db.estimated_duration,
            pub_count=game_db.pub_count,
            puzzles_per_pub=game_db.puzzles_per_pub,
            content=game_db.content or {},
            location_placeholders=game_db.location_placeholders or {},
            route_info=route_info_from_json(game_db.route_info),
            created_at=game_db.created_at,
            updated_at=game_db.updated_at,
        )


class SQLProfileRepository:
    """User profiles (role is the only authorization signal)"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_profile(self, user_id: UserId) -> UserProfileModel | None:
        profile_db = self.db.get(DBUserProfile, user_id)
        if profile_db:
            return self._to_model(profile_db)
        return None

    def list_profiles(self) -> list[UserProfileModel]:
        query = select(DBUserProfile).order_by(DBUserProfile.created_at.desc())
        return [self._to_model(profile_db) for profile_db in self.db.scalars(query)]

    def list_profile_ids(self) -> set[UserId]:
        return set(self.db.scalars(select(DBUserProfile.id)))

    def find_by_email(self, email: str) -> UserProfileModel | None:
        query = select(DBUserProfile).where(
            func.lower(DBUserProfile.email) == email.strip().lower()
        )
        profile_db = self.db.scalars(query).first()
        if profile_db:
            return self._to_model(profile_db)
        return None

    def create_profile(self, profile: UserProfileModel) -> UserProfileModel:
        profile_db = DBUserProfile(id=profile.id, email=profile.email, role=profile.role)
        self.db.add(profile_db)
        self.db.commit()
        self.db.refresh(profile_db)
        return self._to_model(profile_db)

    def update_role(self, user_id: UserId, role: str) -> UserProfileModel | None:
        profile_db = self.db.get(DBUserProfile, user_id)
        if not profile_db:
            return None
        profile_db.role = role
        self.db.commit()
        self.db.refresh(profile_db)
        return self._to_model(profile_db)

    def delete_profile(self, user_id: UserId) -> bool:
        result = self.db.execute(delete(DBUserProfile).where(DBUserProfile.id == user_id))
        self.db.commit()
        return result.rowcount > 0

    def _to_model(self, profile_db: DBUserProfile) -> UserProfileModel:
        return UserProfileModel(
            id=profile_db.id,
            email=profile_db.email,
            role=profile_db.role,
            created_at=profile_db.created_at,
        )


class SQLTemplateRepository:
    """Game template catalog"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def list_templates(
        self, theme: Optional[str] = None, difficulty: Optional[str] = None
    ) -> list[GameTemplateModel]:
        query = select(DBGameTemplate).order_by(DBGameTemplate.name.asc())
        if theme:
            query = query.where(DBGameTemplate.theme == theme)
        if difficulty:
            query = query.where(DBGameTemplate.difficulty == difficulty)
        return [self._to_model(template_db) for template_db in self.db.scalars(query)]

    def get_template(self, template_id: UUID) -> GameTemplateModel | None:
        template_db = self.db.get(DBGameTemplate, template_id)
        if template_db:
            return self._to_model(template_db)
        return None

    def create_template(self, template: GameTemplateModel) -> GameTemplateModel:
        template_db = DBGameTemplate(id=uuid4())
        self._apply(template_db, template)
        self.db.add(template_db)
        self.db.commit()
        self.db.refresh(template_db)
        return self._to_model(template_db)

    def update_template(
        self, template_id: UUID, template: GameTemplateModel
    ) -> GameTemplateModel | None:
        template_db = self.db.get(DBGameTemplate, template_id)
        if not template_db:
            return None
        self._apply(template_db, template)
        self.db.commit()
        self.db.refresh(template_db)
        return self._to_model(template_db)

    def delete_template(self, template_id: UUID) -> bool:
        template_db = self.db.get(DBGameTemplate, template_id)
        if not template_db:
            return False
        self.db.delete(template_db)
        self.db.commit()
        return True

    @staticmethod
    def _apply(template_db: DBGameTemplate, template: GameTemplateModel) -> None:
        template_db.name = template.name
        template_db.theme = template.theme
        template_db.description = template.description
        template_db.story_framework = template.story_framework
        template_db.character_types = list(template.character_types)
        template_db.puzzle_types = list(template.puzzle_types)
        template_db.difficulty = template.difficulty

    def _to_model(self, template_db: DBGameTemplate) -> GameTemplateModel:
        return GameTemplateModel(
            id=template_db.id,
            name=template_db.name,
            theme=template_db.theme,
            description=template_db.description,
            story_framework=template_db.story_framework,
            character_types=template_db.character_types,
            puzzle_types=template_db.puzzle_types,
            difficulty=template_db.difficulty,
            created_at=template_db.created_at,
            updated_at=template_db.updated_at,
        )
