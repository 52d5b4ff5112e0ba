"""
AI Gateway for the maintenance assistant.
Wraps the Gemini generateContent REST endpoint for defect analysis,
diagnosis refinement and equipment history summaries.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from manutencao.core.config import get_settings
from manutencao.core.exceptions import ValidationError
from manutencao.schemas.maintenance import Equipment, MaintenanceRecord
from manutencao.services.export import format_number

logger = logging.getLogger(__name__)

CONNECTION_ERROR_TEXT = "Erro ao conectar com o assistente de IA."
HISTORY_ERROR_TEXT = "Erro na análise de histórico."
EMPTY_HISTORY_TEXT = "Sem histórico para análise."


class AITaskType(str, Enum):
    """Types of AI tasks."""
    DEFECT_ANALYSIS = "defect_analysis"
    DIAGNOSIS_IMPROVEMENT = "diagnosis_improvement"
    HISTORY_SUMMARY = "history_summary"


@dataclass
class AIRequest:
    """AI service request structure."""
    task_type: AITaskType
    prompt: str
    empty_text: str
    error_text: str


class AIGatewayService:
    """
    Text generation for the maintenance screens.

    Every public method returns display text: an empty model reply and any
    failure are both mapped to fixed Portuguese messages, so callers never
    see an exception.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        settings = get_settings()
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.api_base = (api_base or settings.GEMINI_API_BASE).rstrip("/")
        self._session_timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or settings.AI_TIMEOUT_SECONDS
        )

    async def analyze_defect(self, defect_description: str, equipment: Equipment) -> str:
        """
        Suggest root causes and three solution steps for a reported defect.

        Args:
            defect_description: Problem reported by the operator
            equipment: Equipment the problem was observed on

        Returns:
            Model answer or a fixed fallback message
        """
        prompt = f"""
      Você é um especialista em manutenção industrial.
      Equipamento: {equipment.descricao} (Modelo: {equipment.modelo}).
      Problema relatado: "{defect_description}".

      Forneça uma breve análise técnica de possíveis causas raízes e sugira 3 passos para solução.
      Mantenha a resposta concisa e formatada.
    """
        return await self._run(AIRequest(
            task_type=AITaskType.DEFECT_ANALYSIS,
            prompt=prompt,
            empty_text="Não foi possível gerar uma análise.",
            error_text=CONNECTION_ERROR_TEXT,
        ))

    async def improve_diagnosis(
        self,
        diagnosis: str,
        defect_description: str,
        equipment: Equipment,
    ) -> str:
        """Rewrite a mechanic's diagnosis in technical terms and point out gaps."""
        prompt = f"""
      Atue como um Supervisor Sênior de Manutenção Técnica.

      Contexto:
      - Equipamento: {equipment.descricao} ({equipment.modelo} - {equipment.marca})
      - Problema Original: "{defect_description}"
      - Diagnóstico Inicial do Mecânico: "{diagnosis}"

      Sua tarefa é melhorar e validar esse diagnóstico.
      1. Reescreva o diagnóstico de forma mais técnica e precisa (terminologia padrão da indústria).
      2. Identifique se o mecânico pode ter esquecido de verificar algo relacionado a esse sintoma.
      3. Se o diagnóstico parecer incompleto ou vago, sugira o que mais deve ser investigado.

      Responda de forma direta e instrutiva, formatada em Markdown.
    """
        return await self._run(AIRequest(
            task_type=AITaskType.DIAGNOSIS_IMPROVEMENT,
            prompt=prompt,
            empty_text="Não foi possível refinar o diagnóstico.",
            error_text=CONNECTION_ERROR_TEXT,
        ))

    async def generate_history_summary(
        self,
        records: Sequence[MaintenanceRecord],
        equipment: Equipment,
    ) -> str:
        """
        Look for recurring failures in an equipment's history.

        An empty history is answered locally without calling the model.
        """
        if not records:
            return EMPTY_HISTORY_TEXT

        history_text = "\n".join(
            f"- Data: {r.data_inicial}, Falha: {r.defeito_falha}, Causa: {r.causa_diagnostico}, "
            f"Solução: {r.solucao_procedimentos}, Valor: R${format_number(r.valor)}"
            for r in records
        )
        prompt = f"""
      Analise o histórico de manutenção abaixo para o equipamento: {equipment.descricao}.
      Histórico:
      {history_text}

      Identifique padrões recorrentes, eficácia das soluções e sugira um plano de manutenção preventiva.
      Responda em português, formato markdown.
    """
        return await self._run(AIRequest(
            task_type=AITaskType.HISTORY_SUMMARY,
            prompt=prompt,
            empty_text="Análise indisponível.",
            error_text=HISTORY_ERROR_TEXT,
        ))

    async def _run(self, request: AIRequest) -> str:
        start_time = datetime.utcnow()
        try:
            text = await self.generate_content(request.prompt)
        except Exception as e:
            duration_ms = int((datetime.utcnow() - start_time).total_seconds() * 1000)
            logger.error(f"AI task {request.task_type.value} failed after {duration_ms}ms: {e}")
            return request.error_text

        duration_ms = int((datetime.utcnow() - start_time).total_seconds() * 1000)
        logger.info(f"AI task {request.task_type.value} completed in {duration_ms}ms")
        return text or request.empty_text

    async def generate_content(self, prompt: str) -> str:
        """
        Call generateContent and join the text parts of the first candidate.

        Raises:
            ValidationError: If no API key is configured
            aiohttp.ClientError: On transport or HTTP status errors
        """
        if not self.api_key:
            raise ValidationError("Gemini API key is not configured")

        url = f"{self.api_base}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        async with aiohttp.ClientSession(timeout=self._session_timeout) as session:
            async with session.post(
                url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
            ) as response:
                response.raise_for_status()
                body = await response.json()

        return _extract_text(body)


def _extract_text(body: Dict[str, Any]) -> str:
    candidates: List[Dict[str, Any]] = body.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))
