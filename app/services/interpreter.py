"""
Response Interpreter
외부 분석 API 응답(payload)을 {isAIGenerated, confidence, details} 형태로 정규화
"""

from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from app.models.schemas import AnalysisResult

# 판정 정책 상수 (호환성을 위해 그대로 유지)
AI_THRESHOLD = 0.7
DEFAULT_CONFIDENCE = 50.0

# 점수 필드 우선순위: 먼저 존재하는 필드가 사용됨
SCORE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("type", "ai_generated"),
    ("genai", "ai_generated"),
    ("wad", "artificial"),
)

PASSTHROUGH_CATEGORIES = ("offensive", "weapon", "alcohol", "drugs")
NUDITY_KEYS = ("raw", "partial", "safe")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _lookup(payload: Mapping[str, Any], path: Tuple[str, ...]) -> Any:
    node: Any = payload
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def find_score(payload: Mapping[str, Any]) -> Optional[float]:
    """우선순위 체인에서 처음 발견된 숫자 점수 (없으면 None)"""
    for path in SCORE_FIELDS:
        value = _lookup(payload, path)
        if _is_number(value):
            return float(value)
    return None


def is_ai_generated(payload: Mapping[str, Any]) -> bool:
    score = find_score(payload)
    if score is None:
        return False
    return score > AI_THRESHOLD


def calculate_confidence(payload: Mapping[str, Any]) -> float:
    """0~1 점수를 0~100으로 선형 변환 (범위 보정 없음)"""
    score = find_score(payload)
    if score is None:
        return DEFAULT_CONFIDENCE
    return score * 100


def _has_value(value: Any) -> bool:
    """JS 기준 truthy: 빈 dict/list는 존재하는 값으로 취급"""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if _is_number(value):
        return value != 0 and value == value  # NaN 제외
    return True


def extract_details(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    부가 정보 추출

    없는 카테고리는 null/0으로 채우지 않고 생략합니다.
    nudity 하위 키 중 응답에 없는 키도 생략합니다.
    """
    details: Dict[str, Any] = {}

    ai_generated = _lookup(payload, ("type", "ai_generated"))
    if _is_number(ai_generated):
        details["aiGenerated"] = ai_generated

    nudity = payload.get("nudity")
    if _has_value(nudity):
        source = nudity if isinstance(nudity, Mapping) else {}
        details["nudity"] = {key: source[key] for key in NUDITY_KEYS if key in source}

    for category in PASSTHROUGH_CATEGORIES:
        value = payload.get(category)
        if _has_value(value):
            details[category] = value

    return details


def interpret(payload: Mapping[str, Any]) -> AnalysisResult:
    """응답 payload -> AnalysisResult (I/O 없음, 예외 없음)"""
    return AnalysisResult(
        is_ai_generated=is_ai_generated(payload),
        confidence=calculate_confidence(payload),
        details=extract_details(payload),
    )
