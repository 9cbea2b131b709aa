"""
Contract Repository - Persistence operations on the contracts table
"""
import logging

from django.db import DatabaseError, transaction

from apps.contracts.models import Contract
from core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class ContractRepository:
    """Insert, list, count and delete contracts owned by a user"""

    def insert(self, owner_id, title, payload):
        try:
            with transaction.atomic():
                contract = Contract.objects.create(
                    user_id=owner_id,
                    title=title,
                    data_json=payload,
                    pdf_url=None,
                )
        except DatabaseError as e:
            logger.error(f"Error inserting contract for user {owner_id}: {e}")
            raise PersistenceError(f"Could not save contract: {e}") from e
        logger.info(f"Contract {contract.pk} created for user {owner_id}")
        return contract

    def list_by_owner(self, owner_id):
        """Contracts owned by `owner_id`, newest first"""
        try:
            return list(Contract.objects.filter(user_id=owner_id).order_by('-created_at'))
        except DatabaseError as e:
            logger.error(f"Error listing contracts for user {owner_id}: {e}")
            raise PersistenceError(f"Could not load contracts: {e}") from e

    def count_by_owner(self, owner_id):
        try:
            return Contract.objects.filter(user_id=owner_id).count()
        except DatabaseError as e:
            logger.error(f"Error counting contracts for user {owner_id}: {e}")
            raise PersistenceError(f"Could not count contracts: {e}") from e

    def get_for_owner(self, contract_id, owner_id):
        """Single contract owned by `owner_id`, or None"""
        try:
            return Contract.objects.filter(pk=contract_id, user_id=owner_id).first()
        except DatabaseError as e:
            logger.error(f"Error loading contract {contract_id}: {e}")
            raise PersistenceError(f"Could not load contract: {e}") from e

    def delete_by_id(self, contract_id):
        """Delete a contract; returns False when no row matched"""
        try:
            with transaction.atomic():
                deleted, _ = Contract.objects.filter(pk=contract_id).delete()
        except DatabaseError as e:
            logger.error(f"Error deleting contract {contract_id}: {e}")
            raise PersistenceError(f"Could not delete contract: {e}") from e
        if deleted:
            logger.info(f"Contract {contract_id} deleted")
        return bool(deleted)
