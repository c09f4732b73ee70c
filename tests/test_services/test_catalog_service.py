"""
Tests for catalog_service — approval transitions, the featured flag
and the admin service listing.
"""

import json

import pytest

from servicehub.errors import NotFound, ValidationError
from servicehub.models.audit import AuditLog
from servicehub.models.service import ApprovalStatus, Service
from servicehub.models.user import User, UserRole
from servicehub.services import catalog_service


class TestApprovalTransitions:
    """approve_service / reject_service overwrite the status."""

    @pytest.fixture(autouse=True)
    def _setup(self, app, db_session):
        """One provider, one pending service, one admin."""
        self.session = db_session

        self.provider = User(
            name="Pat Provider", email="pat@example.test", role=UserRole.PROVIDER
        )
        self.admin = User(name="Ada Admin", email="ada@example.test", role=UserRole.ADMIN)
        db_session.add_all([self.provider, self.admin])
        db_session.flush()

        self.service = Service(name="House Cleaning", provider_id=self.provider.id)
        db_session.add(self.service)
        db_session.commit()

    def test_new_service_is_pending_and_not_featured(self):
        assert self.service.approval_status == ApprovalStatus.PENDING
        assert self.service.featured is False

    def test_approve_pending_service(self):
        """Approving a pending service leaves the featured flag alone."""
        result = catalog_service.approve_service(self.service.id)
        assert result.id == self.service.id
        assert result.approval_status == ApprovalStatus.APPROVED
        assert result.featured is False

    def test_reject_after_approve(self):
        """A later reject overrides an earlier approve."""
        catalog_service.approve_service(self.service.id)
        result = catalog_service.reject_service(self.service.id)
        assert result.approval_status == ApprovalStatus.REJECTED

    def test_approve_after_reject(self):
        catalog_service.reject_service(self.service.id)
        result = catalog_service.approve_service(self.service.id)
        assert result.approval_status == ApprovalStatus.APPROVED

    def test_approve_twice_is_allowed(self):
        catalog_service.approve_service(self.service.id)
        result = catalog_service.approve_service(self.service.id)
        assert result.approval_status == ApprovalStatus.APPROVED

    def test_change_is_persisted(self):
        catalog_service.reject_service(self.service.id)
        self.session.expire_all()
        stored = self.session.get(Service, self.service.id)
        assert stored.approval_status == ApprovalStatus.REJECTED

    def test_approve_unknown_service_raises_not_found(self):
        with pytest.raises(NotFound, match="not found"):
            catalog_service.approve_service(9999)

    def test_reject_unknown_service_raises_not_found(self):
        with pytest.raises(NotFound):
            catalog_service.reject_service(9999)

    def test_approve_writes_audit_entry(self):
        catalog_service.approve_service(self.service.id, changed_by=self.admin.id)

        entries = AuditLog.query.filter_by(
            entity_type="service", entity_id=self.service.id
        ).all()
        assert len(entries) == 1
        entry = entries[0]
        assert entry.action_type == "APPROVE"
        assert entry.user_id == self.admin.id
        assert json.loads(entry.previous_value) == {"approval_status": "PENDING"}
        assert json.loads(entry.new_value) == {"approval_status": "APPROVED"}

    def test_failed_lookup_writes_no_audit_entry(self):
        with pytest.raises(NotFound):
            catalog_service.reject_service(9999, changed_by=self.admin.id)
        assert AuditLog.query.count() == 0


class TestFeaturedFlag:
    """set_featured_status toggles featured independently of status."""

    @pytest.fixture(autouse=True)
    def _setup(self, app, db_session):
        self.session = db_session

        self.provider = User(
            name="Pat Provider", email="pat@example.test", role=UserRole.PROVIDER
        )
        db_session.add(self.provider)
        db_session.flush()

        self.services = {}
        for status in ApprovalStatus:
            service = Service(
                name=f"{status.value.title()} Service",
                provider_id=self.provider.id,
                approval_status=status,
            )
            db_session.add(service)
            self.services[status] = service
        db_session.commit()

    def test_feature_approved_service(self):
        """Featuring keeps the approval status."""
        service = self.services[ApprovalStatus.APPROVED]
        result = catalog_service.set_featured_status(service.id, True)
        assert result.featured is True
        assert result.approval_status == ApprovalStatus.APPROVED

    @pytest.mark.parametrize("status", list(ApprovalStatus))
    def test_feature_then_unfeature_for_any_status(self, status):
        service = self.services[status]
        catalog_service.set_featured_status(service.id, True)
        result = catalog_service.set_featured_status(service.id, False)
        assert result.featured is False
        assert result.approval_status == status

    def test_feature_pending_service_is_allowed(self):
        service = self.services[ApprovalStatus.PENDING]
        result = catalog_service.set_featured_status(service.id, True)
        assert result.featured is True
        assert result.approval_status == ApprovalStatus.PENDING

    @pytest.mark.parametrize("value", ["true", 1, 0, None])
    def test_non_boolean_is_rejected(self, value):
        service = self.services[ApprovalStatus.APPROVED]
        with pytest.raises(ValidationError):
            catalog_service.set_featured_status(service.id, value)
        assert service.featured is False

    def test_feature_unknown_service_raises_not_found(self):
        with pytest.raises(NotFound):
            catalog_service.set_featured_status(9999, True)

    def test_feature_writes_audit_entry(self):
        service = self.services[ApprovalStatus.APPROVED]
        catalog_service.set_featured_status(service.id, True)

        entry = AuditLog.query.filter_by(action_type="FEATURE").one()
        assert entry.entity_id == service.id
        assert json.loads(entry.previous_value) == {"featured": False}
        assert json.loads(entry.new_value) == {"featured": True}


class TestListServices:
    """list_services returns every service regardless of status."""

    @pytest.fixture(autouse=True)
    def _setup(self, app, db_session):
        self.provider = User(
            name="Pat Provider", email="pat@example.test", role=UserRole.PROVIDER
        )
        db_session.add(self.provider)
        db_session.flush()

        self.ids = []
        for name, status in [
            ("House Cleaning", ApprovalStatus.PENDING),
            ("Garden Care", ApprovalStatus.APPROVED),
            ("Moving Help", ApprovalStatus.REJECTED),
        ]:
            service = Service(
                name=name, provider_id=self.provider.id, approval_status=status
            )
            db_session.add(service)
            db_session.commit()
            self.ids.append(service.id)

    def test_returns_all_statuses(self):
        services = catalog_service.list_services()
        assert {s.approval_status for s in services} == set(ApprovalStatus)

    def test_newest_first(self):
        services = catalog_service.list_services()
        assert [s.id for s in services] == list(reversed(self.ids))

    def test_filter_by_status(self):
        services = catalog_service.list_services(ApprovalStatus.PENDING)
        assert [s.name for s in services] == ["House Cleaning"]

    def test_filter_by_status_name_is_case_insensitive(self):
        services = catalog_service.list_services("approved")
        assert [s.name for s in services] == ["Garden Care"]

    def test_unknown_status_raises_validation_error(self):
        with pytest.raises(ValidationError, match="Unknown approval status"):
            catalog_service.list_services("ARCHIVED")

    def test_provider_name_is_loaded(self):
        services = catalog_service.list_services()
        assert all(s.provider_name == "Pat Provider" for s in services)

    def test_empty_catalog(self, db_session):
        Service.query.delete()
        db_session.commit()
        assert catalog_service.list_services() == []


class TestGetService:
    """get_service lookup."""

    def test_returns_existing_service(self, app, db_session):
        provider = User(name="Pat", email="pat@example.test", role=UserRole.PROVIDER)
        db_session.add(provider)
        db_session.flush()
        service = Service(name="Dog Walking", provider_id=provider.id)
        db_session.add(service)
        db_session.commit()

        assert catalog_service.get_service(service.id) is service

    def test_missing_service_raises_not_found(self, app, db_session):
        with pytest.raises(NotFound, match="Service ID 42 not found"):
            catalog_service.get_service(42)

    def test_get_service_by_id_returns_none(self, app, db_session):
        assert catalog_service.get_service_by_id(42) is None


class TestWorkedExamples:
    """Approve service 1 (pending) and feature service 2 (approved)."""

    @pytest.fixture(autouse=True)
    def _setup(self, app, db_session):
        provider = User(name="Pat", email="pat@example.test", role=UserRole.PROVIDER)
        db_session.add(provider)
        db_session.flush()

        db_session.add_all(
            [
                Service(name="House Cleaning", provider_id=provider.id),
                Service(
                    name="Garden Care",
                    provider_id=provider.id,
                    approval_status=ApprovalStatus.APPROVED,
                ),
            ]
        )
        db_session.commit()

    def test_approve_service_one(self):
        result = catalog_service.approve_service(1)
        assert (result.id, result.approval_status, result.featured) == (
            1,
            ApprovalStatus.APPROVED,
            False,
        )

    def test_feature_service_two(self):
        result = catalog_service.set_featured_status(2, True)
        assert (result.id, result.approval_status, result.featured) == (
            2,
            ApprovalStatus.APPROVED,
            True,
        )
