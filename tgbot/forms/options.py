"""
Option vocabularies and field metadata for the CoopHub waiting-list form.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

ORGANIZATION_SIZE_OPTIONS: Tuple[str, ...] = (
    "Pequena (até 300)",
    "Média (300–1000)",
    "Grande (1000+)",
)

SECTOR_OPTIONS: Tuple[str, ...] = (
    "Grãos",
    "Leite",
    "Frutas/Hortaliças",
    "Pecuária",
    "Mista",
    "Outro",
)

IMPLEMENTATION_TIMELINE_OPTIONS: Tuple[str, ...] = (
    "1–3 meses",
    "3–6 meses",
    "> 6 meses",
)

BETA_PROGRAM_OPTIONS: Tuple[str, ...] = ("Sim", "Não")

PRICE_RANGE_OPTIONS: Tuple[str, ...] = (
    "Até R$ 49/mês",
    "R$ 50–99/mês",
    "R$ 100–199/mês",
    "R$ 200–399/mês",
    "R$ 400+/mês",
)

GOAL_OPTIONS: Tuple[str, ...] = (
    "Operação mais estruturada",
    "Processos mais rápidos",
    "Relatórios automáticos",
    "Transparência para cooperados",
    "Integrações (ERP/contábil)",
)

PAIN_POINT_OPTIONS: Tuple[str, ...] = (
    "Retrabalho e planilhas paralelas",
    "Erros fiscais / notas rejeitadas",
    "Atrasos em recebimento/entrega",
    "Falta de visibilidade financeira",
    "Dificuldade em assembleias/votações",
    "Treinamento demorado da equipe",
)

MODULE_OPTIONS: Tuple[str, ...] = (
    "Cooperados / CRM",
    "Operações (agend./entregas)",
    "Fiscal & Financeiro",
    "Governança / Assembleias",
    "Assistência Técnica",
    "Logística / Romaneios",
    "App Mobile",
    "Integrações ERP/Contábil",
)


class FieldKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    MULTI = "multi"
    CONSENT = "consent"


@dataclass(frozen=True)
class FormField:
    """How a form field is edited and shown on the form card."""

    name: str
    label: str
    kind: FieldKind
    options: Tuple[str, ...] = field(default=())
    required: bool = True


FORM_FIELDS: Tuple[FormField, ...] = (
    FormField("name", "👤 Nome", FieldKind.TEXT),
    FormField("email", "📧 E-mail", FieldKind.TEXT),
    FormField(
        "organization_size",
        "🏢 Porte da cooperativa",
        FieldKind.SELECT,
        ORGANIZATION_SIZE_OPTIONS,
    ),
    FormField("sector", "🌾 Setor", FieldKind.SELECT, SECTOR_OPTIONS),
    FormField("sector_other", "✏️ Setor (outro)", FieldKind.TEXT, required=False),
    FormField(
        "member_count_approx",
        "👥 Nº aproximado de cooperados",
        FieldKind.TEXT,
        required=False,
    ),
    FormField(
        "implementation_timeline",
        "⏱️ Prazo de implantação",
        FieldKind.SELECT,
        IMPLEMENTATION_TIMELINE_OPTIONS,
    ),
    FormField(
        "accepts_beta_program",
        "🧪 Participa do beta?",
        FieldKind.SELECT,
        BETA_PROGRAM_OPTIONS,
    ),
    FormField("price_range", "💰 Faixa de preço", FieldKind.SELECT, PRICE_RANGE_OPTIONS),
    FormField("goals", "🎯 Objetivos", FieldKind.MULTI, GOAL_OPTIONS),
    FormField("goals_other", "✏️ Objetivo (outro)", FieldKind.TEXT, required=False),
    FormField("pain_points", "⚠️ Problemas", FieldKind.MULTI, PAIN_POINT_OPTIONS),
    FormField(
        "pain_points_other", "✏️ Problema (outro)", FieldKind.TEXT, required=False
    ),
    FormField(
        "pain_points_free_text",
        "📝 Conte mais sobre os problemas",
        FieldKind.TEXT,
        required=False,
    ),
    FormField("modules_of_interest", "🧩 Módulos", FieldKind.MULTI, MODULE_OPTIONS),
    FormField(
        "integrations_needed",
        "🔌 Integrações necessárias",
        FieldKind.TEXT,
        required=False,
    ),
    FormField("previous_attempts", "🔁 O que já tentaram", FieldKind.TEXT),
    FormField("consent_given", "✅ Consentimento", FieldKind.CONSENT),
)

FIELDS_BY_NAME = {form_field.name: form_field for form_field in FORM_FIELDS}

MULTI_SELECT_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in FORM_FIELDS if f.kind is FieldKind.MULTI
)
