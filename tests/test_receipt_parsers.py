from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from ridetrack.modules.extraction.parsers.ninety_nine import parse_99_receipt
from ridetrack.modules.extraction.parsers.uber import parse_uber_receipt
from ridetrack.modules.extraction.registry import detect_platform
from ridetrack.modules.rides.models import Platform

UBER_TEXT = """Obrigado por viajar com a Uber
14 de março de 2026

Total R$ 45,90

De: Av. Paulista, 1000 Para: Aeroporto
"""

NINETY_NINE_TEXT = """Recibo da sua corrida
Data: 02/04/2026
Valor: R$ 23.50
Origem: Centro
Destino: Zona Sul
"""


def test_detect_platform_by_sender_or_subject():
    assert detect_platform("noreply@uber.com", "Your trip") == Platform.UBER
    assert detect_platform("recibos@app.com", "Sua viagem com a Uber") == Platform.UBER
    assert detect_platform("recibo@99app.com", "Recibo") == Platform.NINETY_NINE
    assert detect_platform("contato@loja.com", "Corrida 99 finalizada") == Platform.NINETY_NINE


def test_detect_platform_is_case_insensitive():
    assert detect_platform("NoReply@UBER.COM", "") == Platform.UBER


def test_detect_platform_prefers_uber_when_both_names_appear():
    assert detect_platform("noreply@uber.com", "Recibo de R$ 99,00") == Platform.UBER


def test_detect_platform_unknown():
    assert detect_platform("newsletter@shop.com", "Ofertas da semana") is None
    assert detect_platform(None, None) is None


def test_uber_receipt_extracts_value_route_and_date():
    parsed = parse_uber_receipt(UBER_TEXT, "")
    assert parsed is not None
    assert parsed.platform == Platform.UBER
    assert parsed.value == Decimal("45.90")
    assert parsed.origin == "Av. Paulista, 1000"
    assert parsed.destination == "Aeroporto"
    assert parsed.occurred_at == datetime(2026, 3, 14, 3, 0, tzinfo=UTC)


def test_uber_receipt_accepts_english_route_labels():
    parsed = parse_uber_receipt("R$ 12,00\nFrom: Home\nTo: Office\n", "")
    assert parsed is not None
    assert parsed.origin == "Home"
    assert parsed.destination == "Office"


def test_uber_receipt_route_needs_both_labels():
    parsed = parse_uber_receipt("R$ 12,00\nDe: Casa\n", "")
    assert parsed is not None
    assert parsed.origin is None
    assert parsed.destination is None


def test_uber_receipt_invalid_month_leaves_timestamp_absent():
    parsed = parse_uber_receipt("R$ 12,00\n14 de brumário de 2026\n", "")
    assert parsed is not None
    assert parsed.occurred_at is None


def test_uber_receipt_without_value_is_rejected_even_with_route_and_date():
    text = "14 de março de 2026\nDe: Casa Para: Trabalho\n"
    assert parse_uber_receipt(text, "<p>Sem valor</p>") is None


def test_uber_receipt_value_from_html_only():
    parsed = parse_uber_receipt("", "<td>Total</td><td>R$ 19,75</td>")
    assert parsed is not None
    assert parsed.value == Decimal("19.75")


def test_99_receipt_extracts_value_route_and_date():
    parsed = parse_99_receipt(NINETY_NINE_TEXT, "")
    assert parsed is not None
    assert parsed.platform == Platform.NINETY_NINE
    assert parsed.value == Decimal("23.50")
    assert parsed.origin == "Centro"
    assert parsed.destination == "Zona Sul"
    assert parsed.occurred_at == datetime(2026, 4, 2, 3, 0, tzinfo=UTC)


def test_99_receipt_alternate_labels_and_partial_route():
    parsed = parse_99_receipt("R$ 8,00\nPartida: Vila Madalena\n", "")
    assert parsed is not None
    assert parsed.origin == "Vila Madalena"
    assert parsed.destination is None

    parsed = parse_99_receipt("R$ 8,00\nChegada: Moema\n", "")
    assert parsed is not None
    assert parsed.origin is None
    assert parsed.destination == "Moema"


def test_99_receipt_out_of_range_date_is_absent():
    parsed = parse_99_receipt("R$ 8,00\nData: 31/02/2026\n", "")
    assert parsed is not None
    assert parsed.occurred_at is None


def test_99_receipt_without_value_is_rejected():
    assert parse_99_receipt("Origem: Centro\nDestino: Zona Sul\n02/04/2026", "") is None


def test_uber_route_label_may_open_the_next_line():
    parsed = parse_uber_receipt("R$ 12,00\nDe: Rua A\nPara: Rua B\nObrigado!\n", "")
    assert parsed is not None
    assert parsed.origin == "Rua A"
    assert parsed.destination == "Rua B"


def test_uber_origin_stops_at_end_of_line():
    parsed = parse_uber_receipt("De: Rua A\nBairro X\nTotal R$ 10,00\nPara: Rua B\n", "")
    assert parsed is not None
    assert parsed.value == Decimal("10.00")
    assert parsed.origin is None
    assert parsed.destination is None


def test_uber_footer_recipient_line_is_not_a_destination():
    parsed = parse_uber_receipt("R$ 10,00\nDe: Rua A\n\nObrigado! Enviado para: voce@x.com\n", "")
    assert parsed is not None
    assert parsed.origin is None
    assert parsed.destination is None


def test_99_route_values_stop_at_end_of_line():
    text = "R$ 8,00\nOrigem: Centro\nMotorista: Ana\nValor: R$ 8,00\nDestino: Zona Sul\nAvalie\n"
    parsed = parse_99_receipt(text, "")
    assert parsed is not None
    assert parsed.origin == "Centro"
    assert parsed.destination == "Zona Sul"
