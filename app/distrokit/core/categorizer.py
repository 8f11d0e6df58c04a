"""Heuristic package categorization.

Assigns each package one human-meaningful category from substring
patterns. The tables are checked in order and the first hit wins, so
reordering them changes what users see.
"""

GNOME_PATTERNS: tuple[str, ...] = (
    "gnome", "gtk", "glib", "nautilus", "gedit", "evince", "eog",
    "totem", "mutter", "gdm", "gvfs", "gio", "gsettings",
)  # fmt: skip

KDE_PATTERNS: tuple[str, ...] = (
    "kde", "plasma", "qt5", "qt6", "kwin", "dolphin", "konsole",
    "kate", "okular", "kio", "kf5", "kf6",
)  # fmt: skip

AUDIO_PATTERNS: tuple[str, ...] = (
    "pulse", "pipewire", "alsa", "jack", "sound", "audio",
    "spotify", "rhythmbox", "vlc", "mpv", "audacity", "lame", "mp3",
)  # fmt: skip

VIDEO_PATTERNS: tuple[str, ...] = (
    "video", "ffmpeg", "gstreamer", "x264", "x265", "codec",
    "obs", "kdenlive", "handbrake", "mpv", "vlc",
)  # fmt: skip

DEV_PATTERNS: tuple[str, ...] = (
    "gcc", "clang", "llvm", "python", "node", "npm", "cargo", "rust",
    "golang", "java", "jdk", "jre", "maven", "gradle", "cmake", "make",
    "git", "mercurial", "subversion", "dev", "devel", "-dbg",
)  # fmt: skip

GAMES_PATTERNS: tuple[str, ...] = (
    "game", "steam", "wine", "proton", "lutris", "play",
    "minecraft", "supertux",
)  # fmt: skip

OFFICE_PATTERNS: tuple[str, ...] = (
    "libreoffice", "openoffice", "office", "calc", "writer", "impress",
    "pdf", "document", "spreadsheet",
)  # fmt: skip

INTERNET_PATTERNS: tuple[str, ...] = (
    "firefox", "chrome", "chromium", "browser", "thunderbird", "mail",
    "telegram", "discord", "slack", "zoom", "teams", "skype",
)  # fmt: skip

GRAPHICS_PATTERNS: tuple[str, ...] = (
    "gimp", "inkscape", "krita", "blender", "image", "photo",
    "drawing", "paint", "svg", "png", "jpeg",
)  # fmt: skip

FONT_PATTERNS: tuple[str, ...] = ("font", "ttf", "otf", "noto", "dejavu", "liberation")

LIB_PATTERNS: tuple[str, ...] = ("lib", "libc", "libx", "libgl", "libstdc")

# Priority order: earlier tables win
CATEGORY_TABLE: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("GNOME", GNOME_PATTERNS),
    ("KDE/Qt", KDE_PATTERNS),
    ("Audio", AUDIO_PATTERNS),
    ("Video", VIDEO_PATTERNS),
    ("Development", DEV_PATTERNS),
    ("Games", GAMES_PATTERNS),
    ("Office", OFFICE_PATTERNS),
    ("Internet", INTERNET_PATTERNS),
    ("Graphics", GRAPHICS_PATTERNS),
    ("Fonts", FONT_PATTERNS),
    ("Libraries", LIB_PATTERNS),
)

DOCUMENTATION = "Documentation"
SYSTEM = "System"

CATEGORIES: tuple[str, ...] = (
    *(label for label, _ in CATEGORY_TABLE),
    DOCUMENTATION,
    SYSTEM,
)


def categorize(name: str, description: str) -> str:
    """Detect a package category from its name and description.

    Args:
        name: Package name.
        description: Package summary, may be empty.

    Returns:
        One of CATEGORIES.
    """
    name_lower = name.lower()
    desc_lower = description.lower()

    for label, patterns in CATEGORY_TABLE:
        if any(p in name_lower or p in desc_lower for p in patterns):
            return label

    if name.endswith(("-doc", "-docs")):
        return DOCUMENTATION
    return SYSTEM
