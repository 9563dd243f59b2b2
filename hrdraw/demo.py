"""Sample roster used to try the tool without preparing a list."""

DEMO_NAMES: tuple[str, ...] = (
    "王小明", "李大華", "張美麗", "陳志豪", "林怡君",
    "陳建國", "吳雅婷", "楊宗緯", "蔡依林", "周杰倫",
    "張惠妹", "林俊傑", "田馥甄", "蕭敬騰", "鄧紫棋",
    "五月天", "孫燕姿", "梁靜茹", "陳奕迅", "王力宏",
    "劉德華", "張學友", "郭富城", "黎明", "金城武",
)

__all__ = ["DEMO_NAMES"]
