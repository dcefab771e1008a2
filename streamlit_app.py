"""
Streamlit UI - AI Content Detector
"""

import io
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Tuple

import pandas as pd
import requests
import streamlit as st
from PIL import Image

# ============ 설정 ============
API_URL = "http://localhost:3000/api/detect"  # FastAPI 서버 주소

GENERIC_ERROR = "Failed to analyze content. Please try again."

# ============ CSS 스타일 ============
CSS = """
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #22d3ee;
        text-align: center;
        margin-bottom: 1rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #666;
        text-align: center;
        margin-bottom: 2rem;
    }
    .verdict-ai {
        background-color: #ffcccb;
        padding: 1rem;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
    }
    .verdict-real {
        background-color: #d4edda;
        padding: 1rem;
        border-radius: 10px;
        border-left: 5px solid #28a745;
    }
</style>
"""


class DetectionRequestError(Exception):
    """파일 하나의 분석 요청 실패 (카드에 그대로 표시되는 메시지)"""


def send_file_to_api(api_url: str, filename: str, content: bytes, mime_type: str,
                     post=requests.post) -> Dict[str, Any]:
    """
    파일 1개를 백엔드로 전송

    Returns:
        isAIGenerated, confidence, filename

    Raises:
        DetectionRequestError: 서버 오류 메시지 또는 일반 오류 메시지
    """
    files = {"file": (filename, content, mime_type or "application/octet-stream")}

    try:
        response = post(api_url, files=files)
    except requests.exceptions.RequestException:
        raise DetectionRequestError(GENERIC_ERROR)

    if response.status_code != 200:
        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("message") if isinstance(body, dict) else None
        raise DetectionRequestError(message or f"API error: {response.status_code}")

    try:
        data = response.json()
    except ValueError:
        raise DetectionRequestError(GENERIC_ERROR)

    if not isinstance(data, dict):
        raise DetectionRequestError(GENERIC_ERROR)

    try:
        confidence = float(data.get("confidence", 0))
    except (TypeError, ValueError):
        raise DetectionRequestError(GENERIC_ERROR)

    return {
        "isAIGenerated": bool(data.get("isAIGenerated")),
        "confidence": confidence,
        "filename": filename,
    }


def analyze_files(api_url: str, items: List[Tuple[str, str, bytes, str]],
                  on_done: Callable[[str, Dict[str, Any]], None],
                  post=requests.post) -> Dict[str, Dict[str, Any]]:
    """
    파일별 독립 요청 (동시 실행)

    Args:
        items: (key, filename, content, mime_type) 목록
        on_done: 파일 하나가 끝날 때마다 (key, outcome) 으로 호출

    Returns:
        key -> {"result": ...} 또는 {"error": 메시지}
    """
    outcomes: Dict[str, Dict[str, Any]] = {}
    if not items:
        return outcomes

    with ThreadPoolExecutor(max_workers=len(items)) as executor:
        futures = {
            executor.submit(send_file_to_api, api_url, name, content, mime, post): key
            for key, name, content, mime in items
        }

        for future in as_completed(futures):
            key = futures[future]
            try:
                outcome = {"result": future.result()}
            except DetectionRequestError as e:
                outcome = {"error": str(e)}
            except Exception:
                outcome = {"error": GENERIC_ERROR}
            outcomes[key] = outcome
            on_done(key, outcome)

    return outcomes


def format_verdict(result: Dict[str, Any]) -> Tuple[str, str, str]:
    """(라벨, CSS 클래스, 퍼센트 문자열)"""
    if result.get("isAIGenerated"):
        label, css_class = "AI-Generated", "verdict-ai"
    else:
        label, css_class = "Real Content", "verdict-real"
    return label, css_class, f"{float(result.get('confidence', 0)):.1f}"


def render_preview(uploaded_file):
    """이미지/비디오 미리보기"""
    mime = uploaded_file.type or ""
    if mime.startswith("image/"):
        image = Image.open(io.BytesIO(uploaded_file.getvalue()))
        st.image(image, use_container_width=True)
    elif mime.startswith("video/"):
        st.video(uploaded_file.getvalue())
    st.caption(f"파일명: {uploaded_file.name} | 크기: {uploaded_file.size:,} bytes")


def render_result(placeholder, result: Dict[str, Any]):
    label, css_class, confidence = format_verdict(result)
    with placeholder.container():
        st.markdown(f"""
        <div class="{css_class}">
            <h3>{label}</h3>
        </div>
        """, unsafe_allow_html=True)
        st.progress(min(max(float(confidence) / 100, 0.0), 1.0))
        st.caption(f"AI Percentage: {confidence}%")


def render_error(placeholder, message: str):
    with placeholder.container():
        st.error(message)


def render_outcome(placeholder, outcome: Dict[str, Any]):
    if "error" in outcome:
        render_error(placeholder, outcome["error"])
    else:
        render_result(placeholder, outcome["result"])


def main():
    # 페이지 설정
    st.set_page_config(
        page_title="AI Content Detector",
        page_icon="🔍",
        layout="wide",
    )
    st.markdown(CSS, unsafe_allow_html=True)

    # 헤더
    st.markdown('<p class="main-header">🔍 AI Content Detector</p>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">이미지나 비디오를 올리면 AI 생성 여부를 판정합니다</p>', unsafe_allow_html=True)

    # 사이드바
    with st.sidebar:
        st.header("⚙️ 설정")
        api_url = st.text_input("API URL", value=API_URL)
        st.info("ℹ️ 파일은 서버에 저장되지 않습니다. 최대 10MB.")

    uploaded_files = st.file_uploader(
        "파일을 끌어다 놓거나 선택하세요",
        type=["jpg", "jpeg", "png", "webp", "gif", "mp4", "mov", "webm"],
        accept_multiple_files=True,
        key="upload",
    )

    if not uploaded_files:
        return

    # 파일 id별 결과 캐시 (rerun 시 재전송하지 않음)
    cache = st.session_state.setdefault("results", {})

    # 파일마다 카드 + placeholder
    placeholders = {}
    columns = st.columns(min(len(uploaded_files), 3))
    for i, uploaded_file in enumerate(uploaded_files):
        with columns[i % len(columns)]:
            try:
                render_preview(uploaded_file)
            except Exception:
                st.warning(f"미리보기를 표시할 수 없습니다: {uploaded_file.name}")
            placeholder = st.empty()
            placeholders[uploaded_file.file_id] = placeholder
            if uploaded_file.file_id in cache:
                render_outcome(placeholder, cache[uploaded_file.file_id])

    pending = [f for f in uploaded_files if f.file_id not in cache]

    if pending and st.button("🚀 분석 시작", type="primary", key="analyze"):
        for f in pending:
            placeholders[f.file_id].info(f"⏳ Processing {f.name}...")

        def on_done(key, outcome):
            cache[key] = outcome
            render_outcome(placeholders[key], outcome)

        analyze_files(
            api_url,
            [(f.file_id, f.name, f.getvalue(), f.type) for f in pending],
            on_done,
        )

    rows = []
    for f in uploaded_files:
        outcome = cache.get(f.file_id)
        if outcome is None:
            continue
        if "error" in outcome:
            rows.append({"파일명": f.name, "판정": "error", "AI Percentage": "-"})
        else:
            label, _, confidence = format_verdict(outcome["result"])
            rows.append({"파일명": f.name, "판정": label, "AI Percentage": f"{confidence}%"})

    if rows:
        st.divider()
        st.subheader("📋 결과 요약")
        st.dataframe(pd.DataFrame(rows), use_container_width=True)


if __name__ == "__main__":
    main()
