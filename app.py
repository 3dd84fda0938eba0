#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Reserve Time Web Demo
基于 Streamlit 的预约时间解析演示应用
"""

from datetime import datetime

import streamlit as st

from reserve_time import ParseError, TimeParser
from reserve_time.core.utils import get_timezone


st.set_page_config(
    page_title="Reserve Time", page_icon="⏰", layout="wide", initial_sidebar_state="collapsed"
)

st.markdown(
    """
<style>
    .block-container {
        padding-top: 2rem;
        padding-bottom: 1rem;
        max-width: 95%;
    }
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        text-align: center;
        margin-bottom: 0.3rem;
    }
    .time-range {
        background: white;
        padding: 0.8rem;
        border-radius: 0.5rem;
        margin: 0.5rem 0;
        box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1);
        border-left: 3px solid #f5576c;
    }
    .time-display {
        font-size: 1.1rem;
        font-weight: bold;
        color: #333;
        font-family: 'Monaco', 'Menlo', monospace;
    }
    .time-label {
        color: #666;
        font-size: 0.85rem;
        margin-bottom: 0.3rem;
    }
</style>
""",
    unsafe_allow_html=True,
)

EXAMPLES = [
    "noon tomorrow + 5 hours",
    "from 5:45pm to noon tomorrow",
    "friday 11:30am",
    "september 2nd 11:59pm",
    "2019-02-22 7:45pm",
    "for 15 hours",
    "+1day",
]


@st.cache_resource
def get_time_parser():
    """初始化并缓存解析器"""
    return TimeParser(get_timezone())


def display_range(start, end):
    start_html = (
        f'<div style="flex: 1;"><div class="time-label">开始 start</div>'
        f'<div class="time-display">{start:%Y-%m-%d %H:%M:%S %Z}</div></div>'
        '<div style="color: #999;">→</div>'
        if start is not None
        else ""
    )
    st.markdown(
        f"""
    <div class="time-range">
        <div style="display: flex; align-items: center; gap: 1rem;">
            {start_html}
            <div style="flex: 1;">
                <div class="time-label">结束 end</div>
                <div class="time-display">{end:%Y-%m-%d %H:%M:%S %Z}</div>
            </div>
        </div>
    </div>
    """,
        unsafe_allow_html=True,
    )


def main():
    st.markdown('<div class="main-header">⏰ Reserve Time</div>', unsafe_allow_html=True)

    time_parser = get_time_parser()

    col_left, col_right = st.columns([1.2, 1], gap="medium")

    with col_left:
        col_config1, col_config2, col_config3 = st.columns(3)
        with col_config1:
            base_date = st.date_input("📅 日期", datetime.now())
        with col_config2:
            base_time = st.time_input("🕐 时间", datetime.now().time())
        with col_config3:
            mode = st.selectbox("模式 mode", ["range", "duration"], index=0)

        selected_example = st.selectbox(
            "💡 示例",
            [""] + EXAMPLES,
            format_func=lambda x: "选择示例..." if x == "" else x,
        )
        query_text = st.text_input("📝 输入时间表达式", value=selected_example)
        parse_button = st.button("🚀 解析", type="primary", use_container_width=True)

    with col_right:
        st.markdown("### 📊 解析结果")

        if parse_button and query_text:
            now = datetime.combine(base_date, base_time)
            try:
                if mode == "duration":
                    start, end = None, time_parser.parse_duration(now, query_text)
                else:
                    start, end = time_parser.parse_range(now, query_text)
                display_range(start, end)
            except ParseError as e:
                st.error(f"❌ parsetime: {e}")
                marked = time_parser.format_error(query_text, e)
                if marked:
                    st.code(marked)
        elif parse_button:
            st.warning("⚠️ 请先输入文本")
        else:
            st.info("👈 在左侧输入时间表达式并点击「解析」")


if __name__ == "__main__":
    main()
