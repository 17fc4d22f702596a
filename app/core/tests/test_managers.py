"""
Tests for SoftDeleteManager and SoftDeleteQuerySet.

These tests verify that:
- SoftDeleteManager filters out soft-deleted records by default
- QuerySet operations (delete, hard_delete, restore) work correctly
- deleted() / active() / with_deleted() select the right rows
"""

import pytest

from payments.models import Payment
from payments.tests.factories import PaymentFactory


@pytest.fixture
def payments(db):
    """Three payments, the first one soft deleted."""
    created = PaymentFactory.create_batch(3)
    created[0].soft_delete()
    return created


# =============================================================================
# Manager Filtering Tests
# =============================================================================


class TestSoftDeleteManagerFiltering:
    """Tests for default filtering in SoftDeleteManager."""

    def test_objects_excludes_deleted_by_default(self, payments):
        assert set(Payment.objects.values_list("pk", flat=True)) == {
            payments[1].pk,
            payments[2].pk,
        }

    def test_objects_get_raises_for_deleted(self, payments):
        with pytest.raises(Payment.DoesNotExist):
            Payment.objects.get(pk=payments[0].pk)

    def test_all_objects_includes_deleted(self, payments):
        assert Payment.all_objects.count() == 3


class TestSoftDeleteManagerMethods:
    """Tests for SoftDeleteManager helper methods."""

    def test_deleted_returns_only_deleted_records(self, payments):
        assert list(Payment.objects.deleted()) == [payments[0]]

    def test_with_deleted_returns_all_records(self, payments):
        assert Payment.objects.with_deleted().count() == 3


# =============================================================================
# QuerySet Operation Tests
# =============================================================================


class TestSoftDeleteQuerySetDelete:
    """Tests for SoftDeleteQuerySet.delete()."""

    def test_queryset_delete_soft_deletes(self, payments):
        """delete() should mark rows deleted, not remove them."""
        count, detail = Payment.objects.filter(pk=payments[1].pk).delete()

        assert count == 1
        assert detail == {"payments.Payment": 1}
        assert Payment.all_objects.get(pk=payments[1].pk).is_deleted is True

    def test_queryset_delete_skips_already_deleted(self, payments):
        count, _ = Payment.objects.with_deleted().delete()

        assert count == 2
        assert Payment.all_objects.filter(is_deleted=True).count() == 3

    def test_queryset_delete_sets_deleted_at(self, payments):
        Payment.objects.filter(pk=payments[2].pk).delete()

        assert Payment.all_objects.get(pk=payments[2].pk).deleted_at is not None


class TestSoftDeleteQuerySetHardDelete:
    """Tests for SoftDeleteQuerySet.hard_delete()."""

    def test_hard_delete_permanently_removes_records(self, payments):
        Payment.objects.with_deleted().hard_delete()

        assert Payment.all_objects.count() == 0


class TestSoftDeleteQuerySetRestore:
    """Tests for SoftDeleteQuerySet.restore()."""

    def test_restore_makes_records_visible(self, payments):
        restored = Payment.objects.deleted().restore()

        assert restored == 1
        assert Payment.objects.count() == 3
        assert Payment.all_objects.get(pk=payments[0].pk).deleted_at is None


class TestSoftDeleteQuerySetFilters:
    """Tests for deleted() and active() on the queryset."""

    def test_deleted_filter_returns_only_deleted(self, payments):
        assert list(Payment.objects.with_deleted().deleted()) == [payments[0]]

    def test_active_filter_returns_only_active(self, payments):
        assert Payment.objects.with_deleted().active().count() == 2
