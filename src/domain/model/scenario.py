"""Scenario domain model and the built-in practice scenarios."""

from dataclasses import dataclass, field
from typing import Any

from domain.model.identity import new_id


@dataclass(frozen=True)
class Scenario:
    """A named practice context driving a conversation session."""
    id: str
    title: str
    icon: str
    description: str
    cheat_sheet: tuple[str, ...] = field(default_factory=tuple)
    is_custom: bool = False

    @staticmethod
    def create_custom(
        title: str, icon: str, description: str, cheat_sheet: list[str],
    ) -> 'Scenario':
        """Factory for AI-generated scenarios."""
        return Scenario(
            id=f"custom-{new_id()}",
            title=title,
            icon=icon,
            description=description,
            cheat_sheet=tuple(cheat_sheet),
            is_custom=True,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "icon": self.icon,
            "description": self.description,
            "cheatSheet": list(self.cheat_sheet),
            "isCustom": self.is_custom,
        }


# ── Built-in scenarios ────────────────────────────────────────

BUILT_IN_SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        id="coffee",
        title="點咖啡 (Ordering Coffee)",
        icon="fa-coffee",
        description="練習在當地的咖啡館點餐與客製化飲品。",
        cheat_sheet=("我想點一杯...", "微糖少冰", "內用還是外帶？", "多少錢？"),
    ),
    Scenario(
        id="checkin",
        title="飯店辦理入住 (Hotel Check-in)",
        icon="fa-hotel",
        description="處理預訂資訊、詢問設施與早餐時間。",
        cheat_sheet=("我有預約", "早餐幾點開始？", "有提供 Wi-Fi 嗎？", "延遲退房"),
    ),
    Scenario(
        id="emergency",
        title="緊急情況 (Emergency)",
        icon="fa-ambulance",
        description="迷路、遺失物品或身體不適時的求助。",
        cheat_sheet=("請幫幫我", "我的護照丟了", "最近的醫院在哪？", "我迷路了"),
    ),
    Scenario(
        id="casual",
        title="日常閒聊 (Casual Chat)",
        icon="fa-comments",
        description="與新朋友交談，分享愛好與週末計劃。",
        cheat_sheet=("你最近好嗎？", "你平常喜歡做什麼？", "很高興認識你", "這天氣真不錯"),
    ),
)
