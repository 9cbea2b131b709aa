from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone

from apps.contracts.models import Contract
from apps.contracts.views import wizard_session_key
from core.exceptions import PersistenceError
from core.services.contract_repository import ContractRepository
from tests.conftest import PASSWORD

pytestmark = pytest.mark.django_db

CREATE_URL = reverse("contracts:create")
DASHBOARD_URL = reverse("contracts:dashboard")


def walk_wizard(client):
    """Fill every step of the wizard, ending on step 4"""
    client.post(CREATE_URL, {"action": "next", "contractor_name": "A", "contracted_name": "B"})
    client.post(CREATE_URL, {
        "action": "next",
        "contract_type": "Freelance",
        "contract_object": "Landing page",
        "value": "R$100",
    })
    client.post(CREATE_URL, {"action": "next", "confidentiality": "1"})


def wizard_state(client, user):
    return client.session[wizard_session_key(user.pk)]


def wizard_step(client, user):
    return wizard_state(client, user)["step"]


def test_public_pages_render(client):
    assert client.get(reverse("contracts:index")).status_code == 200
    assert client.get(reverse("contracts:demo") + "?step=3").status_code == 200
    assert client.get(reverse("accounts:auth")).status_code == 200


def test_private_pages_redirect_to_auth(client):
    for url in (DASHBOARD_URL, CREATE_URL):
        response = client.get(url)
        assert response.status_code == 302
        assert response.url.startswith(reverse("accounts:auth"))


class TestAuth:

    def test_register_then_login(self, client):
        response = client.post(reverse("accounts:auth"), {
            "mode": "register", "name": "Ana", "email": "ana@example.com", "password": PASSWORD,
        })
        assert response.status_code == 200
        assert response.context["mode"] == "login"
        assert get_user_model().objects.filter(username="ana@example.com").exists()

        response = client.post(reverse("accounts:auth"), {
            "mode": "login", "email": "ana@example.com", "password": PASSWORD,
        })
        assert response.status_code == 302
        assert response.url == DASHBOARD_URL

    def test_short_password_is_rejected_before_sign_up(self, client):
        response = client.post(reverse("accounts:auth"), {
            "mode": "register", "name": "Ana", "email": "ana@example.com", "password": "123",
        })

        assert response.status_code == 200
        assert not get_user_model().objects.exists()
        assert any("6 caracteres" in str(m) for m in response.context["messages"])

    def test_bad_credentials_show_error(self, client, make_user):
        make_user(email="ana@example.com")

        response = client.post(reverse("accounts:auth"), {
            "mode": "login", "email": "ana@example.com", "password": "errada",
        })

        assert response.status_code == 200
        assert any("incorretos" in str(m) for m in response.context["messages"])

    def test_logout_drops_session_and_draft(self, logged_client):
        client, user = logged_client()
        client.post(CREATE_URL, {"action": "update", "contractor_name": "A"})

        client.post(reverse("accounts:logout"))

        assert wizard_session_key(user.pk) not in client.session
        assert client.get(DASHBOARD_URL).status_code == 302


class TestWizard:

    def test_next_is_blocked_until_required_fields_are_filled(self, logged_client):
        client, user = logged_client()

        client.post(CREATE_URL, {"action": "next", "contractor_name": "A"})
        assert wizard_step(client, user) == 1

        client.post(CREATE_URL, {"action": "next", "contracted_name": "B"})
        assert wizard_step(client, user) == 2

    def test_back_and_preview(self, logged_client):
        client, user = logged_client()
        walk_wizard(client)
        assert wizard_step(client, user) == 4

        client.post(CREATE_URL, {"action": "back"})
        assert wizard_step(client, user) == 3

        response = client.get(CREATE_URL)
        assert response.context["wizard"].step == 3
        assert "CLÁUSULA DE CONFIDENCIALIDADE: Incluída" in response.context["preview"]

    def test_finish_saves_contract(self, logged_client):
        client, user = logged_client()
        walk_wizard(client)

        response = client.post(CREATE_URL, {"action": "finish"})

        assert response.status_code == 302
        assert response.url == DASHBOARD_URL
        contract = Contract.objects.get(user=user)
        assert contract.title == "Freelance - A e B"
        assert contract.data_json["confidentiality"] is True
        assert contract.pdf_url is None
        assert wizard_session_key(user.pk) not in client.session

    def test_finish_before_last_step_does_nothing(self, logged_client):
        client, user = logged_client()
        client.post(CREATE_URL, {"action": "next", "contractor_name": "A", "contracted_name": "B"})

        client.post(CREATE_URL, {"action": "finish"})

        assert not Contract.objects.exists()
        assert wizard_step(client, user) == 2

    def test_finish_with_blanked_required_fields_is_rejected(self, logged_client):
        client, user = logged_client()
        walk_wizard(client)

        response = client.post(CREATE_URL, {
            "action": "finish", "contractor_name": "", "contracted_name": "", "value": "",
        })

        assert response.status_code == 302
        assert response.url == CREATE_URL
        assert not Contract.objects.exists()
        assert wizard_step(client, user) == 1

    def test_finish_with_blank_value_returns_to_step_two(self, logged_client):
        client, user = logged_client()
        walk_wizard(client)

        client.post(CREATE_URL, {"action": "finish", "value": ""})

        assert not Contract.objects.exists()
        assert wizard_step(client, user) == 2
        assert wizard_state(client, user)["draft"]["contractor_name"] == "A"

    def test_draft_is_stored_per_user(self, logged_client, make_user):
        client, user = logged_client()
        other = make_user(email="outro@example.com")
        session = client.session
        session[wizard_session_key(other.pk)] = {"step": 3, "draft": {"contractor_name": "X"}}
        session.save()

        response = client.get(CREATE_URL)

        assert response.context["wizard"].step == 1
        assert response.context["draft"].contractor_name == ""
        assert wizard_session_key(user.pk) != wizard_session_key(other.pk)

    def test_failed_save_keeps_draft(self, logged_client, monkeypatch):
        client, user = logged_client()
        walk_wizard(client)

        def broken_insert(self, owner_id, title, payload):
            raise PersistenceError("database is locked")

        monkeypatch.setattr(ContractRepository, "insert", broken_insert)
        response = client.post(CREATE_URL, {"action": "finish"}, follow=True)

        assert not Contract.objects.exists()
        assert any("erro ao salvar" in str(m) for m in response.context["messages"])
        state = wizard_state(client, user)
        assert state["step"] == 4
        assert state["draft"]["contractor_name"] == "A"

    def test_limit_reached_page_when_plan_is_full(self, logged_client):
        client, user = logged_client(plan="free")
        ContractRepository().insert(user.pk, "Venda - A e B", {})

        response = client.get(CREATE_URL)

        assert response.status_code == 200
        assert "contracts/limit_reached.html" in [t.name for t in response.templates]

    def test_limit_blocks_finish(self, logged_client):
        client, user = logged_client(plan="free")
        walk_wizard(client)
        ContractRepository().insert(user.pk, "Venda - A e B", {})

        client.post(CREATE_URL, {"action": "finish"})

        assert Contract.objects.filter(user=user).count() == 1


class TestDashboard:

    def test_lists_and_filters(self, logged_client):
        client, user = logged_client(plan="professional")
        repository = ContractRepository()
        recent = repository.insert(user.pk, "Venda - A e B", {"contractType": "Venda"})
        old = repository.insert(user.pk, "Aluguel - C e D", {})
        Contract.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=10))

        response = client.get(DASHBOARD_URL)
        assert [c.pk for c in response.context["contracts"]] == [recent.pk, old.pk]
        assert response.context["stats"]["total"] == 2
        assert response.context["stats"]["recent"] == 1
        assert "Não informado" in response.content.decode()

        response = client.get(DASHBOARD_URL + "?filter=recent")
        assert [c.pk for c in response.context["contracts"]] == [recent.pk]

    def test_create_action_disabled_on_full_plan(self, logged_client):
        client, user = logged_client(plan="free")
        ContractRepository().insert(user.pk, "Venda - A e B", {})

        response = client.get(DASHBOARD_URL)

        assert response.context["can_create_contract"] is False
        assert "Limite de contratos atingido" in response.content.decode()

    def test_only_own_contracts_are_listed(self, logged_client, make_user):
        client, _ = logged_client()
        other = make_user(email="outro@example.com")
        ContractRepository().insert(other.pk, "Venda - X e Y", {})

        response = client.get(DASHBOARD_URL)

        assert list(response.context["contracts"]) == []


class TestDelete:

    def test_get_asks_for_confirmation(self, logged_client):
        client, user = logged_client()
        contract = ContractRepository().insert(user.pk, "Venda - A e B", {})

        response = client.get(reverse("contracts:delete", args=[contract.pk]))

        assert response.status_code == 200
        assert Contract.objects.filter(pk=contract.pk).exists()

    def test_post_deletes(self, logged_client):
        client, user = logged_client()
        contract = ContractRepository().insert(user.pk, "Venda - A e B", {})

        response = client.post(reverse("contracts:delete", args=[contract.pk]))

        assert response.status_code == 302
        assert not Contract.objects.filter(pk=contract.pk).exists()

    def test_cannot_delete_someone_elses_contract(self, logged_client, make_user):
        client, _ = logged_client()
        other = make_user(email="outro@example.com")
        contract = ContractRepository().insert(other.pk, "Venda - X e Y", {})

        response = client.post(reverse("contracts:delete", args=[contract.pk]))

        assert response.status_code == 404
        assert Contract.objects.filter(pk=contract.pk).exists()

    def test_failed_delete_leaves_list_unchanged(self, logged_client, monkeypatch):
        client, user = logged_client()
        contract = ContractRepository().insert(user.pk, "Venda - A e B", {})

        def broken_delete(self, contract_id):
            raise PersistenceError("offline")

        monkeypatch.setattr(ContractRepository, "delete_by_id", broken_delete)
        response = client.post(reverse("contracts:delete", args=[contract.pk]), follow=True)

        assert [c.pk for c in response.context["contracts"]] == [contract.pk]
        assert any("erro ao excluir" in str(m) for m in response.context["messages"])


class TestDownloads:

    def test_html_download(self, logged_client):
        client, user = logged_client()
        contract = ContractRepository().insert(user.pk, "Venda - A e B", {"contractType": "Venda"})

        response = client.get(reverse("contracts:download_html", args=[contract.pk]))

        assert response.status_code == 200
        assert response["Content-Disposition"] == 'attachment; filename="venda-a-e-b.html"'
        assert "CONTRATO DE VENDA" in response.content.decode()

    def test_pdf_download_on_paid_plan(self, logged_client):
        client, user = logged_client(plan="standard")
        contract = ContractRepository().insert(user.pk, "Venda - A e B", {"contractType": "Venda"})

        response = client.get(reverse("contracts:download_pdf", args=[contract.pk]))

        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_pdf_download_refused_on_free_plan(self, logged_client):
        client, user = logged_client(plan="free")
        contract = ContractRepository().insert(user.pk, "Venda - A e B", {})

        response = client.get(reverse("contracts:download_pdf", args=[contract.pk]))

        assert response.status_code == 302
        assert response.url == DASHBOARD_URL


def test_create_list_and_delete_end_to_end(logged_client):
    client, user = logged_client(plan="free")

    walk_wizard(client)
    client.post(CREATE_URL, {"action": "finish"})

    response = client.get(DASHBOARD_URL + "?filter=all")
    contracts = list(response.context["contracts"])
    assert len(contracts) == 1
    payload = contracts[0].payload
    assert payload.contract_type == "Freelance"
    assert payload.contractor_name == "A"
    assert payload.contracted_name == "B"
    assert client.get(reverse("api:plan_status")).json()["contracts_used"] == 1

    client.post(reverse("contracts:delete", args=[contracts[0].pk]))

    response = client.get(DASHBOARD_URL + "?filter=all")
    assert list(response.context["contracts"]) == []
    assert client.get(reverse("api:plan_status")).json()["contracts_used"] == 0
