from typing import (
    TypeVar,
    Generic,
    Sequence,
    Optional,
    Any,
    Literal,
    Union,
)

from sqlalchemy import func, inspect
from sqlalchemy import select, asc, desc, and_, or_, not_, delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from webcommon.core.exceptions import DatabaseConstraintError, RepositoryError
from webcommon.core.pagination import PaginationParams
from webcommon.models.base import Base
from webcommon.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=Base)

# Operator keys
ComparisonKey = Literal["=", ">", "<", ">=", "<=", "!=", "like", "in", "not_in"]

# Comparison operator filter
ComparisonFilter = dict[ComparisonKey, Any]

# Recursive where expression
WhereExpr = Union[
    dict[str, Any | ComparisonFilter],  # column filters
    dict[Literal["and", "or"], list["WhereExpr"]],  # logical nesting
    dict[Literal["not"], "WhereExpr"],
]

OrderBy = list[tuple[str, Literal["asc", "desc"]]]


class BaseRepository(Generic[T]):
    """
    Generic data access for one mapped class.

    Mutations return affected row counts so controllers can hand them to
    BaseController.to_affected_rows / to_operation_result directly.
    """

    model: type[T]

    def __init__(self, session: Session, model: type[T]):
        self.session = session
        self.model = model

    def _column(self, name: str):
        column = getattr(self.model, name, None)
        if column is None:
            raise ValueError(f"{self.model.__name__} has no column '{name}'")
        return column

    def _compare(self, column, op: str, value: Any):
        match op:
            case "=":
                return column == value
            case "!=":
                return column != value
            case ">":
                return column > value
            case "<":
                return column < value
            case ">=":
                return column >= value
            case "<=":
                return column <= value
            case "like":
                return column.like(value)
            case "in":
                return column.in_(value)
            case "not_in":
                return column.not_in(value)
            case _:
                raise ValueError(f"Unsupported operator '{op}'")

    def _build_where(self, where: WhereExpr):
        """Recursively converts a WhereExpr into a SQLAlchemy expression."""
        if not where:
            return None

        expressions = []

        for key, value in where.items():
            key_lower = key.lower()

            if key_lower in ("and", "or"):
                sub_exprs = [e for e in (self._build_where(c) for c in value) if e is not None]
                if sub_exprs:
                    expressions.append(and_(*sub_exprs) if key_lower == "and" else or_(*sub_exprs))
            elif key_lower == "not":
                expr = self._build_where(value)
                if expr is not None:
                    expressions.append(not_(expr))
            else:
                column = self._column(key)
                if isinstance(value, dict):
                    expressions.extend(self._compare(column, op, v) for op, v in value.items())
                elif isinstance(value, (list, tuple, set)):
                    expressions.append(column.in_(value))
                else:
                    expressions.append(column == value)

        if not expressions:
            return None
        return and_(*expressions) if len(expressions) > 1 else expressions[0]

    def _finish(self, commit: bool) -> None:
        if commit:
            self.session.commit()
        else:
            self.session.flush()

    def find(
            self,
            where: Optional[WhereExpr] = None,
            order_by: Optional[OrderBy] = None,
            skip: Optional[int] = None,
            take: Optional[int] = None,
    ) -> Sequence[T]:
        stmt = select(self.model)

        where_expr = self._build_where(where) if where else None
        if where_expr is not None:
            stmt = stmt.where(where_expr)

        for col, direction in order_by or []:
            column = self._column(col)
            stmt = stmt.order_by(asc(column) if direction == "asc" else desc(column))

        if skip is not None:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)

        return self.session.execute(stmt).scalars().all()

    def find_one(self, where: Optional[WhereExpr] = None) -> Optional[T]:
        rows = self.find(where=where, take=1)
        return rows[0] if rows else None

    def count(self, where: Optional[WhereExpr] = None) -> int:
        """Count rows matching the filter"""
        stmt = select(func.count()).select_from(self.model)

        where_expr = self._build_where(where) if where else None
        if where_expr is not None:
            stmt = stmt.where(where_expr)

        return self.session.execute(stmt).scalar_one()

    def find_paginated(
            self,
            where: Optional[WhereExpr] = None,
            order_by: Optional[OrderBy] = None,
            pagination: Optional[PaginationParams] = None,
    ) -> tuple[Sequence[T], int]:
        """
        Find one page of rows.

        Returns tuple of (items, total_count)
        """
        total = self.count(where=where)
        items = self.find(
            where=where,
            order_by=order_by,
            skip=pagination.skip if pagination else None,
            take=pagination.take if pagination else None,
        )
        return items, total

    def create(self, data: dict[str, Any] | T, commit: bool = True) -> T:
        """
        Insert a row.

        Args:
            data: Either a dictionary of column values or a model instance
            commit: Whether to commit the transaction immediately

        Raises:
            ValueError: When the dictionary names unknown columns
            DatabaseConstraintError: When a constraint is violated
            RepositoryError: For other database errors
        """
        if isinstance(data, dict):
            valid_columns = {col.key for col in inspect(self.model).columns}
            invalid_keys = set(data) - valid_columns
            if invalid_keys:
                raise ValueError(
                    f"{self.model.__name__} has no columns: {', '.join(sorted(invalid_keys))}"
                )
            instance = self.model(**data)
        else:
            instance = data

        try:
            self.session.add(instance)
            self._finish(commit)
        except IntegrityError as e:
            self.session.rollback()
            raise DatabaseConstraintError(
                f"{self.model.__name__} violates a database constraint"
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Create {self.model.__name__} failed: {e}")
            raise RepositoryError(f"Database error during create: {e}") from e

        self.session.refresh(instance)
        return instance

    def update(self, where: WhereExpr, data: dict[str, Any], commit: bool = True) -> int:
        """
        Update rows matching the filter.

        Returns:
            Number of updated rows
        """
        where_expr = self._build_where(where)
        if where_expr is None:
            raise ValueError("where parameter is required for update operation")

        stmt = update(self.model).where(where_expr).values(**data)
        try:
            result = self.session.execute(stmt)
            self._finish(commit)
        except IntegrityError as e:
            self.session.rollback()
            raise DatabaseConstraintError("Update would violate a database constraint") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Update {self.model.__name__} failed: {e}")
            raise RepositoryError(f"Database error during update: {e}") from e

        return result.rowcount

    def delete(self, where: WhereExpr, commit: bool = True) -> int:
        """
        Delete rows matching the filter.

        Example:
            count = repo.delete(where={"status": "archived"})

        Returns:
            Number of deleted rows
        """
        where_expr = self._build_where(where)
        if where_expr is None:
            raise ValueError("where parameter is required for delete operation")

        try:
            result = self.session.execute(delete(self.model).where(where_expr))
            self._finish(commit)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Delete {self.model.__name__} failed: {e}")
            raise RepositoryError(f"Database error during delete: {e}") from e

        return result.rowcount
