"""Integration tests for company, dashboard and report API routes."""

import pytest

ACME = "11222333000181"


@pytest.fixture
def with_trip(client, seeded):
    client.post(
        "/api/operations",
        json={
            "data": "2026-10-05",
            "motoristaId": seeded["driver"],
            "veiculoPlaca": "ABC1234",
            "contratanteCNPJ": ACME,
            "faturamento": 1000,
            "adiantamento": 400,
            "comissao": 150,
            "ajudantes": [{"id": seeded["helper"], "diaria": 90}],
        },
    )
    client.post("/api/expenses", json={"data": "2026-10-10", "descricao": "ipva", "valor": 60})
    return seeded


def test_company_profile(client):
    assert client.get("/api/company").json()["summary"] == "NENHUM DADO."

    response = client.put(
        "/api/company", json={"razaoSocial": "minha transp", "cnpj": "1", "telefone": "2"}
    )

    assert response.status_code == 200
    assert response.json()["razaoSocial"] == "MINHA TRANSP"
    assert client.get("/api/company").json()["summary"] == "MINHA TRANSP | CNPJ: 1 | Tel: 2"


def test_month_stats(client, with_trip):
    stats = client.get("/api/dashboard/stats", params={"year": 2026, "month": 10}).json()

    assert stats["revenue"] == 1000
    assert stats["operation_costs"] == 240
    assert stats["general_expenses"] == 60
    assert stats["net"] == 700


def test_month_stats_rejects_bad_month(client):
    assert client.get("/api/dashboard/stats", params={"month": 13}).status_code == 422


def test_calendar(client, with_trip):
    cal = client.get("/api/dashboard/calendar", params={"year": 2026, "month": 10}).json()

    assert cal["title"] == "OUTUBRO DE 2026"
    assert cal["leading_blanks"] == 4
    day5 = cal["days"][4]
    assert day5["has_operation"] is True
    assert day5["entries"][0]["driver_name"] == "ANA"


def test_chart_png(client, with_trip):
    response = client.get("/api/dashboard/chart.png", params={"year": 2026})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_billing_formats(client, with_trip):
    params = {"start": "2026-10-01", "end": "2026-10-31", "client": ACME}

    report = client.get("/api/reports/billing", params=params).json()
    assert report["total"] == 600
    assert report["rows"][0]["date_display"] == "05/10/2026"

    html = client.get("/api/reports/billing.html", params=params)
    assert html.headers["content-type"].startswith("text/html")
    assert "RELATÓRIO DE COBRANÇA" in html.text

    pdf = client.get("/api/reports/billing.pdf", params=params)
    assert pdf.headers["content-type"] == "application/pdf"
    assert "relatorio.pdf" in pdf.headers["content-disposition"]
    assert pdf.content.startswith(b"%PDF")


def test_billing_errors(client, with_trip):
    response = client.get("/api/reports/billing", params={"client": ACME})
    assert response.status_code == 400
    assert response.json()["detail"] == "Select the period."

    response = client.get(
        "/api/reports/billing.pdf",
        params={"start": "2027-01-01", "end": "2027-01-31", "client": ACME},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No operations found."


def test_receipt(client, with_trip):
    params = {
        "start": "2026-10-01",
        "end": "2026-10-31",
        "payee": f"ajudante:{with_trip['helper']}",
    }

    receipt = client.get("/api/reports/receipt", params=params).json()
    assert receipt["total"] == 90
    assert receipt["lines"][0]["description"] == "DIÁRIA"
    assert receipt["payer"]["company_name"] == ""

    html = client.get("/api/reports/receipt.html", params=params).text
    assert "AJUDANTE: <strong>BETO</strong>" in html

    bad = client.get("/api/reports/receipt", params={**params, "payee": "chefe:1"})
    assert bad.status_code == 400
