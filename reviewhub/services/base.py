import logging
from typing import Optional

from sqlalchemy.orm import Session


class BaseService:
    """
    Common plumbing for domain services: the request's DB session, the tenant
    the caller acts for, and a module-scoped logger.
    """

    def __init__(self, db: Session, org_id: Optional[int] = None):
        self.db = db
        self.org_id = org_id
        self._logger = logging.getLogger(self.__class__.__module__)

    def commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def log_info(self, message: str, **extra):
        self._logger.info(message, extra=self._context(extra))

    def log_warning(self, message: str, **extra):
        self._logger.warning(message, extra=self._context(extra))

    def log_error(self, message: str, **extra):
        self._logger.error(message, extra=self._context(extra))

    def _context(self, extra: dict) -> dict:
        if self.org_id is not None:
            extra.setdefault("organization_id", self.org_id)
        return extra
