from __future__ import annotations

import pytest

from legatepro.core.exceptions import NotFoundError, ValidationError
from legatepro.services.estate_service import EstateService


def test_create_estate_requires_a_name(db_session, seed, context_for):
    _tenant, user = seed.tenant("acme")

    with pytest.raises(ValidationError):
        EstateService(db=db_session).create_estate(context_for(user), display_name="  ")


def test_create_and_list_estates(db_session, seed, context_for):
    tenant, user = seed.tenant("acme")
    other, _ = seed.tenant("other")
    shared = seed.estate(other, display_name="Shared")
    seed.estate(other, display_name="Private")
    seed.share(shared, tenant)
    service = EstateService(db=db_session)

    created = service.create_estate(context_for(user), decedent_name="Ada Smith", court_state="ca")

    assert created.tenant_id == tenant.id
    assert created.court_state == "CA"
    assert created.status == "OPEN"
    assert {estate.id for estate in service.list_estates(context_for(user))} == {created.id, shared.id}


def test_deleted_estate_is_not_found(db_session, seed, context_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Gone")
    estate.mark_deleted()
    db_session.commit()

    with pytest.raises(NotFoundError):
        EstateService(db=db_session).require_access(context_for(user), estate.id)
