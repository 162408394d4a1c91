"""
类目库：手工维护的 Best Buy 类目条目，按领域分组，启动时构建一次且不再修改。

- 分组：一级、电脑、线材、手机、电视、游戏、相机、家电、智能家居。
- ALL_CATEGORIES：各组按声明顺序拼接，供匹配遍历。
- PICKER_CATEGORIES：界面选择器用的精简子集（部分名称为短名）。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .category import CategoryEntry

logger = logging.getLogger(__name__)

# 一级类目
TOP_LEVEL_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0100000",
        name="TV & Home Theater",
        keywords=("tv", "television", "home theater", "entertainment"),
    ),
    CategoryEntry(
        id="abcat0200000",
        name="Home Audio & Speakers",
        keywords=("audio", "speakers", "stereo", "sound system"),
    ),
    CategoryEntry(
        id="abcat0204000",
        name="Headphones",
        keywords=("headphones", "earbuds", "earphones", "audio"),
    ),
    CategoryEntry(
        id="abcat0207000",
        name="Musical Instruments",
        keywords=("music", "instruments", "guitar", "piano", "drums"),
    ),
    CategoryEntry(
        id="abcat0300000",
        name="Car Electronics & GPS",
        keywords=("car", "auto", "gps", "navigation", "dash cam"),
    ),
    CategoryEntry(
        id="abcat0400000",
        name="Cameras, Camcorders & Drones",
        keywords=("camera", "photo", "video", "drone", "camcorder", "photography"),
    ),
    CategoryEntry(
        id="abcat0500000",
        name="Computers & Tablets",
        keywords=("computer", "pc", "laptop", "tablet", "ipad"),
    ),
    CategoryEntry(
        id="abcat0600000",
        name="Music, Movies & TV Shows",
        keywords=("music", "movies", "dvd", "blu-ray", "vinyl", "cd"),
    ),
    CategoryEntry(
        id="abcat0700000",
        name="Video Games",
        keywords=("games", "gaming", "xbox", "playstation", "nintendo", "switch", "ps5"),
    ),
    CategoryEntry(
        id="abcat0800000",
        name="Cell Phones",
        keywords=("phone", "cell", "mobile", "iphone", "android", "smartphone"),
    ),
    CategoryEntry(
        id="abcat0900000",
        name="Appliances",
        keywords=("appliance", "refrigerator", "washer", "dryer", "kitchen"),
    ),
    CategoryEntry(
        id="pcmcat1528819595254",
        name="Services",
        keywords=("service", "geek squad", "installation", "repair"),
    ),
)

# 电脑类子类目
COMPUTER_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0502000",
        name="Laptops",
        parent_name="Computers & Tablets",
        keywords=("laptop", "notebook", "macbook", "chromebook", "portable"),
    ),
    CategoryEntry(
        id="abcat0501000",
        name="Desktop & All-in-One Computers",
        parent_name="Computers & Tablets",
        keywords=("desktop", "pc", "imac", "all-in-one", "tower"),
    ),
    CategoryEntry(
        id="pcmcat209000050006",
        name="Tablets",
        parent_name="Computers & Tablets",
        keywords=("tablet", "ipad", "android tablet", "surface"),
    ),
    CategoryEntry(
        id="abcat0507000",
        name="Computer Cards & Components",
        parent_name="Computers & Tablets",
        keywords=("components", "gpu", "cpu", "motherboard", "ram", "pc parts"),
    ),
    CategoryEntry(
        id="abcat0504000",
        name="Hard Drives & Storage",
        parent_name="Computers & Tablets",
        keywords=("storage", "hard drive", "ssd", "hdd", "external drive"),
    ),
    CategoryEntry(
        id="abcat0509000",
        name="Monitors",
        parent_name="Computers & Tablets",
        keywords=("monitor", "display", "screen", "computer monitor"),
    ),
    CategoryEntry(
        id="abcat0503000",
        name="Wi-Fi & Networking",
        parent_name="Computers & Tablets",
        keywords=("wifi", "router", "modem", "networking", "mesh", "ethernet"),
    ),
    CategoryEntry(
        id="abcat0515000",
        name="Computer Accessories & Peripherals",
        parent_name="Computers & Tablets",
        keywords=("accessories", "peripherals", "computer accessories"),
    ),
    CategoryEntry(
        id="abcat0513000",
        name="Mice & Keyboards",
        parent_name="Computer Accessories",
        keywords=("mouse", "keyboard", "mice", "mechanical keyboard"),
    ),
    CategoryEntry(
        id="abcat0515046",
        name="Webcams",
        parent_name="Computer Accessories",
        keywords=("webcam", "web camera", "streaming camera"),
    ),
    CategoryEntry(
        id="abcat0511001",
        name="Printers, Ink & Toner",
        parent_name="Computer Accessories",
        keywords=("printer", "ink", "toner", "printing"),
    ),
)

# 线材与接头
CABLE_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0515012",
        name="Cables & Connectors",
        parent_name="Computer Accessories",
        keywords=("cable", "connector", "cord", "wire", "cables"),
    ),
    # USB 线材使用 abcat0515013（abcat0515018 为空的废弃类目）
    CategoryEntry(
        id="abcat0515013",
        name="USB Cables & Adapters",
        parent_name="Cables & Connectors",
        keywords=("usb", "usb cable", "usb cables", "usb adapter", "usb-c", "usb c", "type-c", "type c", "micro usb", "lightning", "charging cable", "data cable"),
    ),
    CategoryEntry(
        id="abcat0515016",
        name="Ethernet Cables",
        parent_name="Cables & Connectors",
        keywords=("ethernet", "network cable", "cat5", "cat6", "lan cable"),
    ),
    CategoryEntry(
        id="pcmcat138100050035",
        name="Monitor & Video Cables",
        parent_name="Cables & Connectors",
        keywords=("video cable", "display cable", "displayport", "vga", "dvi"),
    ),
    CategoryEntry(
        id="pcmcat138100050040",
        name="Power Cables",
        parent_name="Cables & Connectors",
        keywords=("power cable", "power cord", "ac adapter"),
    ),
    CategoryEntry(
        id="pcmcat1584032708792",
        name="USB Hubs",
        parent_name="Cables & Connectors",
        keywords=("usb hub", "port hub", "usb splitter"),
    ),
    CategoryEntry(
        id="abcat0107015",
        name="A/V Cables & Connectors",
        parent_name="TV & Home Theater Accessories",
        keywords=("av cable", "audio video", "rca", "component"),
    ),
    CategoryEntry(
        id="abcat0107020",
        name="HDMI Cables",
        parent_name="A/V Cables & Connectors",
        keywords=("hdmi", "hdmi cable", "hdmi cord", "high speed hdmi"),
    ),
)

# 手机类目
CELL_PHONE_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0811002",
        name="Cell Phone Accessories",
        parent_name="Cell Phones",
        keywords=("phone accessories", "mobile accessories", "cell accessories"),
    ),
    CategoryEntry(
        id="abcat0811004",
        name="Cell Phone Chargers & Cables",
        parent_name="Cell Phone Accessories",
        keywords=("phone charger", "charging cable", "lightning cable", "phone cable"),
    ),
    CategoryEntry(
        id="abcat0811006",
        name="Cell Phone Cases",
        parent_name="Cell Phone Accessories",
        keywords=("phone case", "case", "cover", "protective case"),
    ),
    CategoryEntry(
        id="pcmcat171900050031",
        name="Cell Phone Screen Protectors",
        parent_name="Cell Phone Accessories",
        keywords=("screen protector", "tempered glass", "screen guard"),
    ),
    CategoryEntry(
        id="pcmcat191200050015",
        name="iPhone Accessories",
        parent_name="Cell Phone Accessories",
        keywords=("iphone", "apple accessories", "ios accessories"),
    ),
    CategoryEntry(
        id="pcmcat305200050007",
        name="Samsung Galaxy Accessories",
        parent_name="Cell Phone Accessories",
        keywords=("samsung", "galaxy", "android accessories"),
    ),
    CategoryEntry(
        id="pcmcat156400050037",
        name="Unlocked Cell Phones",
        parent_name="Cell Phones",
        keywords=("unlocked", "unlocked phone", "no contract"),
    ),
    CategoryEntry(
        id="pcmcat305200050000",
        name="iPhone",
        parent_name="Cell Phones",
        keywords=("iphone", "apple phone", "ios"),
    ),
    CategoryEntry(
        id="pcmcat305200050001",
        name="Samsung Galaxy",
        parent_name="Cell Phones",
        keywords=("samsung", "galaxy", "android phone"),
    ),
    CategoryEntry(
        id="pcmcat321000050003",
        name="Smartwatches & Accessories",
        parent_name="Cell Phone Accessories",
        keywords=("smartwatch", "apple watch", "fitness tracker", "wearable"),
    ),
)

# 电视与家庭影院
TV_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0101000",
        name="TVs",
        parent_name="TV & Home Theater",
        keywords=("tv", "television", "smart tv", "oled", "qled", "4k tv"),
    ),
    CategoryEntry(
        id="abcat0205007",
        name="Sound Bars",
        parent_name="TV & Home Theater",
        keywords=("soundbar", "sound bar", "tv speaker", "home audio"),
    ),
    CategoryEntry(
        id="abcat0203000",
        name="Home Theater & Stereo Systems",
        parent_name="TV & Home Theater",
        keywords=("home theater", "stereo", "surround sound", "receiver"),
    ),
    CategoryEntry(
        id="pcmcat161100050040",
        name="Streaming Devices",
        parent_name="TV & Home Theater",
        keywords=("streaming", "roku", "fire tv", "chromecast", "apple tv"),
    ),
    CategoryEntry(
        id="abcat0107000",
        name="TV & Home Theater Accessories",
        parent_name="TV & Home Theater",
        keywords=("tv accessories", "home theater accessories"),
    ),
    CategoryEntry(
        id="abcat0106000",
        name="TV Stands, Mounts & Furniture",
        parent_name="TV & Home Theater",
        keywords=("tv stand", "tv mount", "wall mount", "entertainment center"),
    ),
    CategoryEntry(
        id="pcmcat158900050008",
        name="Projectors & Screens",
        parent_name="TV & Home Theater",
        keywords=("projector", "projection", "screen", "home cinema"),
    ),
)

# 游戏类目
GAMING_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0712000",
        name="PC Gaming",
        parent_name="Video Games",
        keywords=("pc gaming", "gaming pc", "computer games"),
    ),
    CategoryEntry(
        id="abcat0701000",
        name="PlayStation",
        parent_name="Video Games",
        keywords=("playstation", "ps5", "ps4", "sony", "psn"),
    ),
    CategoryEntry(
        id="abcat0707000",
        name="Xbox",
        parent_name="Video Games",
        keywords=("xbox", "xbox series x", "xbox one", "microsoft"),
    ),
    CategoryEntry(
        id="abcat0703000",
        name="Nintendo",
        parent_name="Video Games",
        keywords=("nintendo", "switch", "mario", "zelda"),
    ),
    CategoryEntry(
        id="abcat0715000",
        name="Video Game Accessories",
        parent_name="Video Games",
        keywords=("gaming accessories", "controller", "headset"),
    ),
)

# 相机与无人机
CAMERA_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0401000",
        name="Digital Cameras",
        parent_name="Cameras, Camcorders & Drones",
        keywords=("camera", "digital camera", "dslr", "mirrorless"),
    ),
    CategoryEntry(
        id="pcmcat242800050021",
        name="Drones",
        parent_name="Cameras, Camcorders & Drones",
        keywords=("drone", "quadcopter", "dji", "aerial"),
    ),
    CategoryEntry(
        id="abcat0410000",
        name="Digital Camera Accessories",
        parent_name="Cameras, Camcorders & Drones",
        keywords=("camera accessories", "lens", "tripod", "camera bag"),
    ),
    CategoryEntry(
        id="abcat0402000",
        name="Camcorders",
        parent_name="Cameras, Camcorders & Drones",
        keywords=("camcorder", "video camera", "action camera", "gopro"),
    ),
)

# 家电类目
APPLIANCE_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="abcat0901000",
        name="Refrigerators",
        parent_name="Appliances",
        keywords=("refrigerator", "fridge", "freezer"),
    ),
    CategoryEntry(
        id="abcat0912000",
        name="Washers & Dryers",
        parent_name="Appliances",
        keywords=("washer", "dryer", "laundry", "washing machine"),
    ),
    CategoryEntry(
        id="abcat0904000",
        name="Ranges, Cooktops & Ovens",
        parent_name="Appliances",
        keywords=("range", "oven", "stove", "cooktop"),
    ),
    CategoryEntry(
        id="abcat0905000",
        name="Dishwashers",
        parent_name="Appliances",
        keywords=("dishwasher",),
    ),
    CategoryEntry(
        id="abcat0910000",
        name="Small Kitchen Appliances",
        parent_name="Appliances",
        keywords=("small appliance", "blender", "coffee maker", "toaster", "air fryer"),
    ),
    CategoryEntry(
        id="abcat0908000",
        name="Vacuums & Floor Care",
        parent_name="Appliances",
        keywords=("vacuum", "floor care", "roomba", "robot vacuum"),
    ),
)

# 智能家居
SMART_HOME_CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry(
        id="pcmcat254000050002",
        name="Smart Home",
        keywords=("smart home", "home automation", "connected home"),
    ),
    CategoryEntry(
        id="pcmcat748302046861",
        name="Smart Speakers & Displays",
        parent_name="Smart Home",
        keywords=("smart speaker", "alexa", "echo", "google home", "homepod"),
    ),
    CategoryEntry(
        id="pcmcat254000050003",
        name="Smart Lighting",
        parent_name="Smart Home",
        keywords=("smart light", "philips hue", "smart bulb", "led"),
    ),
    CategoryEntry(
        id="pcmcat254700050006",
        name="Smart Thermostats",
        parent_name="Smart Home",
        keywords=("thermostat", "nest", "ecobee", "smart thermostat"),
    ),
    CategoryEntry(
        id="pcmcat254900050006",
        name="Smart Doorbells & Locks",
        parent_name="Smart Home",
        keywords=("doorbell", "ring", "smart lock", "security"),
    ),
)

# 分组名 -> 条目，顺序即拼接顺序
CATEGORY_GROUPS: dict[str, tuple[CategoryEntry, ...]] = {
    "top_level": TOP_LEVEL_CATEGORIES,
    "computer": COMPUTER_CATEGORIES,
    "cable": CABLE_CATEGORIES,
    "cell_phone": CELL_PHONE_CATEGORIES,
    "tv": TV_CATEGORIES,
    "gaming": GAMING_CATEGORIES,
    "camera": CAMERA_CATEGORIES,
    "appliance": APPLIANCE_CATEGORIES,
    "smart_home": SMART_HOME_CATEGORIES,
}

ALL_CATEGORIES: tuple[CategoryEntry, ...] = tuple(
    entry for group in CATEGORY_GROUPS.values() for entry in group
)

# 选择器：一级类目 + 常用子类目（短名，无关键词）
PICKER_CATEGORIES: tuple[CategoryEntry, ...] = TOP_LEVEL_CATEGORIES + (
    CategoryEntry(id="abcat0502000", name="Laptops", parent_name="Computers & Tablets"),
    CategoryEntry(id="abcat0501000", name="Desktops", parent_name="Computers & Tablets"),
    CategoryEntry(id="pcmcat209000050006", name="Tablets", parent_name="Computers & Tablets"),
    CategoryEntry(id="abcat0515000", name="Computer Accessories", parent_name="Computers & Tablets"),
    CategoryEntry(id="abcat0515012", name="Cables & Connectors", parent_name="Computer Accessories"),
    CategoryEntry(id="abcat0515013", name="USB Cables & Adapters", parent_name="Cables & Connectors"),
    CategoryEntry(id="abcat0101000", name="TVs", parent_name="TV & Home Theater"),
    CategoryEntry(id="abcat0205007", name="Sound Bars", parent_name="TV & Home Theater"),
    CategoryEntry(id="pcmcat161100050040", name="Streaming Devices", parent_name="TV & Home Theater"),
    CategoryEntry(id="abcat0811002", name="Cell Phone Accessories", parent_name="Cell Phones"),
    CategoryEntry(id="pcmcat156400050037", name="Unlocked Phones", parent_name="Cell Phones"),
    CategoryEntry(id="pcmcat321000050003", name="Smartwatches", parent_name="Cell Phone Accessories"),
)


def find_duplicate_ids(entries: Iterable[CategoryEntry]) -> list[str]:
    """返回重复出现的类目 ID（按首次重复出现的顺序）。"""
    seen: set[str] = set()
    duplicates: list[str] = []
    for entry in entries:
        if entry.id in seen and entry.id not in duplicates:
            duplicates.append(entry.id)
        seen.add(entry.id)
    return duplicates


class Taxonomy:
    """
    不可变类目库：构造后条目、分组与选择器子集均不再变化。
    匹配器通过构造参数注入本对象，而不是直接读取模块级常量。
    """

    __slots__ = ("_groups", "_entries", "_picker")

    def __init__(
        self,
        groups: dict[str, tuple[CategoryEntry, ...]] | None = None,
        picker: Iterable[CategoryEntry] | None = None,
    ) -> None:
        source = CATEGORY_GROUPS if groups is None else groups
        self._groups: dict[str, tuple[CategoryEntry, ...]] = {
            name: tuple(entries) for name, entries in source.items()
        }
        self._entries: tuple[CategoryEntry, ...] = tuple(
            entry for entries in self._groups.values() for entry in entries
        )
        self._picker: tuple[CategoryEntry, ...] = (
            PICKER_CATEGORIES if picker is None and groups is None else tuple(picker or ())
        )
        duplicates = find_duplicate_ids(self._entries)
        if duplicates:
            # 保留「首个匹配」语义，仅提示
            logger.warning("类目库存在重复 ID，按 ID 查找时取首个: %s", ", ".join(duplicates))

    @classmethod
    def from_entries(cls, entries: Iterable[CategoryEntry], group: str = "default") -> Taxonomy:
        """由单组条目构造，便于测试或自定义类目库。"""
        return cls(groups={group: tuple(entries)})

    @property
    def entries(self) -> tuple[CategoryEntry, ...]:
        """全部可搜索条目，顺序即声明顺序。"""
        return self._entries

    @property
    def picker_entries(self) -> tuple[CategoryEntry, ...]:
        return self._picker

    @property
    def group_names(self) -> tuple[str, ...]:
        return tuple(self._groups)

    def group(self, name: str) -> tuple[CategoryEntry, ...]:
        """按分组名取条目；未知分组返回空元组。"""
        return self._groups.get(name, ())

    @property
    def top_level_entries(self) -> tuple[CategoryEntry, ...]:
        return self.group("top_level")

    def get_by_id(self, category_id: str) -> CategoryEntry | None:
        """线性查找首个 ID 完全相等的条目。"""
        for entry in self._entries:
            if entry.id == category_id:
                return entry
        return None

    def __iter__(self) -> Iterator[CategoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


_default_taxonomy: Taxonomy | None = None


def get_taxonomy() -> Taxonomy:
    """进程级默认类目库（首次调用时构建）。"""
    global _default_taxonomy
    if _default_taxonomy is None:
        _default_taxonomy = Taxonomy()
        logger.debug("类目库已加载: %d 条", len(_default_taxonomy))
    return _default_taxonomy
