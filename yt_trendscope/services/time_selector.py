from __future__ import annotations

from datetime import datetime
from typing import Optional

from yt_trendscope.models import TimeSlot

NEWS = TimeSlot("25", "news", "☀️ 아침 시간대 - 하루를 시작하는 뉴스와 정보")
EDUCATION = TimeSlot("27", "education", "📚 오전 시간대 - 학습과 자기계발 콘텐츠")
LIFESTYLE = TimeSlot("26", "lifestyle", "🍽️ 점심 시간대 - 요리와 라이프스타일")
PEOPLE = TimeSlot("22", "people", "💼 오후 시간대 - 인물과 브이로그")
ENTERTAINMENT = TimeSlot("24", "entertainment", "🎭 저녁 시간대 - 엔터테인먼트와 휴식")
MUSIC = TimeSlot("10", "music", "🌙 심야 시간대 - 감성적인 음악")
GAMING = TimeSlot("20", "gaming", "🌌 새벽 시간대 - 게임과 오락")


class TimeBasedSelector:
    """Maps the hour of day (local clock) to a trending category."""

    def select(self, hour: Optional[int] = None) -> TimeSlot:
        if hour is None:
            hour = datetime.now().hour
        if not 0 <= hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {hour}")

        if 6 <= hour < 9:
            return NEWS
        if 9 <= hour < 12:
            return EDUCATION
        if 12 <= hour < 14:
            return LIFESTYLE
        if 14 <= hour < 18:
            return PEOPLE
        if 18 <= hour < 22:
            return ENTERTAINMENT
        if hour >= 22 or hour < 2:
            return MUSIC
        # 02:00-06:00
        return GAMING
