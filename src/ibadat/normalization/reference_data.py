"""Reference data for deed-name normalization.

This module holds the static phrase tables, Surah spelling patterns, and
keyword lists consumed by :mod:`ibadat.normalization.rules`. Everything here
is plain data; ordering matters wherever a table is a tuple because the
canonicalizer evaluates entries first-match-wins.

Bump ``RULE_TABLE_VERSION`` whenever a canonical spelling changes, since
stored entries are re-normalized with whatever table is current.
"""

RULE_TABLE_VERSION = "2025.1"

# Keywords marking an input as a Darood/Salawat deed.
SALAWAT_KEYWORDS = ("salawat", "durood", "darood")

# Literal Urdu/Arabic-script phrases mapped to canonical English names.
# Matching is substring containment on the lowercased input, in table order.
SCRIPT_PHRASES = (
    ("درود خضری", "Darood Khizri"),
    ("درود خظری", "Darood Khizri"),
    ("درودِ خضری", "Darood Khizri"),
    ("درود تاج", "Darood Taj"),
    ("درودِ تاج", "Darood Taj"),
    ("درود ابراہیمی", "Darood Ibrahimi"),
    ("درود پاک", "Salawat"),
    ("درود شریف", "Salawat"),
    ("سبحان اللہ", "Subhan Allah"),
    ("سبحان الله", "Subhan Allah"),
    ("الحمدللہ", "Alhamdulillah"),
    ("الحمد للہ", "Alhamdulillah"),
    ("الحمد لله", "Alhamdulillah"),
    ("اللہ اکبر", "Allahu Akbar"),
    ("الله أكبر", "Allahu Akbar"),
    ("استغفراللہ", "Istighfar"),
    ("استغفر اللہ", "Istighfar"),
    ("أستغفر الله", "Istighfar"),
    ("لا الہ الا اللہ", "1st Kalma"),
    ("لا إله إلا الله", "1st Kalma"),
    ("پہلا کلمہ", "1st Kalma"),
    ("دوسرا کلمہ", "2nd Kalma"),
    ("تیسرا کلمہ", "3rd Kalma"),
    ("چوتھا کلمہ", "4th Kalma"),
    ("پانچواں کلمہ", "5th Kalma"),
    ("چھٹا کلمہ", "6th Kalma"),
    ("سورہ یاسین", "Surah Ya-Sin"),
    ("سورہ یٰسین", "Surah Ya-Sin"),
    ("سورة يس", "Surah Ya-Sin"),
    ("سورہ ملک", "Surah Al-Mulk"),
    ("سورة الملك", "Surah Al-Mulk"),
    ("سورہ رحمن", "Surah Ar-Rahman"),
    ("سورہ رحمٰن", "Surah Ar-Rahman"),
    ("سورة الرحمن", "Surah Ar-Rahman"),
    ("سورہ واقعہ", "Surah Al-Waqi'ah"),
    ("سورة الواقعة", "Surah Al-Waqi'ah"),
    ("سورہ کہف", "Surah Al-Kahf"),
    ("سورة الكهف", "Surah Al-Kahf"),
    ("سورہ مزمل", "Surah Al-Muzzammil"),
    ("سورہ فاتحہ", "Surah Al-Fatihah"),
    ("سورہ اخلاص", "Surah Al-Ikhlas"),
    ("آیت الکرسی", "Ayatul Kursi"),
    ("آیۃ الکرسی", "Ayatul Kursi"),
)

# Urdu words for a Quran part. Handled by a Juz rule so digits survive.
SCRIPT_QURAN_PART_KEYWORDS = ("سپارہ", "پارہ")

# Optional "surah"/"sura"/"surat"/"soorah" prefix and "Al-"/"Ar-"/"An-" style article.
SURAH_PREFIX = r"(?:s[uo]{1,2}ra[ht]?\s+)?"
SURAH_PREFIX_REQUIRED = r"s[uo]{1,2}ra[ht]?\s+"
ARTICLE = r"(?:a[dlnrstz]h?[\s-]?)?"

# (name pattern, canonical, needs "surah" prefix, takes article)
# Patterns are anchored on the whole trimmed string when compiled.
SURAH_PATTERNS = (
    (r"ya+[\s'-]?s[ie]+n", "Surah Ya-Sin", False, False),
    (r"mulk", "Surah Al-Mulk", False, True),
    (r"r[ae]h?ma+n", "Surah Ar-Rahman", False, True),
    (r"wa+q[iy]+['`]?a+h?", "Surah Al-Waqi'ah", False, True),
    (r"kah+f", "Surah Al-Kahf", False, True),
    (r"fa+t[ie]+ha+h?", "Surah Al-Fatihah", False, True),
    (r"ikh?la+s", "Surah Al-Ikhlas", False, True),
    (r"fala[qk]", "Surah Al-Falaq", False, True),
    (r"na+s", "Surah An-Nas", False, True),
    (r"baq[ae]ra+h?", "Surah Al-Baqarah", False, True),
    (r"jum+[ue]?['`]?a+h?", "Surah Al-Jumu'ah", False, True),
    (r"muz+a+m+[ie]l", "Surah Al-Muzzammil", False, True),
    (r"ka[wu][ts]h?a+r", "Surah Al-Kawthar", False, True),
    (r"ka+f[ie]r[uoe]+n", "Surah Al-Kafirun", False, True),
    (r"nasr", "Surah An-Nasr", False, True),
    # Without the prefix "duha" is the Nawafil prayer, not the Surah.
    (r"duha+", "Surah Ad-Duhaa", True, True),
)

# Verse keyword rules: (required substrings, canonical). All substrings must be present.
VERSE_KEYWORDS = (
    (("kursi",), "Ayatul Kursi"),
    (("amanar", "rasul"), "Amanar Rasul"),
)
VERSE_ALTERNATIVES = (
    (("kareema", "karima"), "Ayat Kareema"),
)

# Nawafil prayers; patterns tolerate doubled or dropped letters.
NAWAFIL_PATTERNS = (
    (r"tah+a*j+ud", "Tahajjud"),
    (r"ishra+[qk]", "Ishraq"),
    (r"chasht|duha|doha", "Salat al-Duha"),
    (r"aw+ab+in", "Awwabin"),
    (r"wit+a?r", "Witr"),
)

# Specific Darood names: (aliases, canonical, requires a Salawat keyword).
DAROOD_NAMES = (
    (("khizri",), "Darood Khizri", False),
    (("taaj", "taj"), "Darood Taj", False),
    (("shifa",), "Darood Shifa", False),
    (("tanjeena", "tunjina", "tunajjina"), "Darood Tanjeena", False),
    (("ibrahimi",), "Darood Ibrahimi", False),
    (("nariya",), "Darood Nariya", False),
    (("ghousia",), "Darood Ghousia", False),
    (("mahi",), "Darood Mahi", False),
    (("lakhi",), "Darood Lakhi", False),
    (("muqaddas",), "Darood Muqaddas", False),
    # "Allahu Akbar" is a tasbih, so "akbar" alone is not enough.
    (("akbar",), "Darood Akbar", True),
    (("hazara",), "Darood Hazara", False),
)

# Inputs that are only a generic reference to sending Salawat.
GENERIC_SALAWAT_PHRASES = frozenset(
    {
        "darood",
        "darood sharif",
        "darood shareef",
        "darood pak",
        "reading darood",
        "sent darood",
        "durood",
        "durood sharif",
        "durood shareef",
        "durood pak",
        "salawat",
        "salavat",
        "sending salawat",
    }
)
GENERIC_SALAWAT_CANONICAL = "Salawat"

# The six Kalimas by ordinal. Checked before the generic Kalma keyword.
KALMA_PATTERNS = (
    (r"\b(?:1st|first|pehla|pahla)\s+kal[ie]?ma\b|\bkal[ie]?ma[\s-]+(?:e[\s-]+)?ta[iy]+[aie]?ba+h?\b", "1st Kalma"),
    (r"\b(?:2nd|second|dusra|doosra)\s+kal[ie]?ma\b|\bkal[ie]?ma[\s-]+(?:e[\s-]+)?shaha+dat\b", "2nd Kalma"),
    (r"\b(?:3rd|third|teesra|tisra)\s+kal[ie]?ma\b|\bkal[ie]?ma[\s-]+(?:e[\s-]+)?tamjee?d\b", "3rd Kalma"),
    (r"\b(?:4th|fourth|chautha|chotha)\s+kal[ie]?ma\b|\bkal[ie]?ma[\s-]+(?:e[\s-]+)?ta[uw]h?eed\b", "4th Kalma"),
    (r"\b(?:5th|fifth|panchwan)\s+kal[ie]?ma\b|\bkal[ie]?ma[\s-]+(?:e[\s-]+)?astaghfar\b", "5th Kalma"),
    (r"\b(?:6th|sixth|chhata|chata)\s+kal[ie]?ma\b|\bkal[ie]?ma[\s-]+(?:e[\s-]+)?rad+[\s-]*e?[\s-]*kufr\b", "6th Kalma"),
)

# Other Zikr: (any-of substrings, canonical), evaluated in order.
ZIKR_KEYWORDS = (
    (("istighfar", "astaghfar"), "Istighfar"),
    (("kalma", "kalima"), "Kalma"),
    (("tasbeeh", "tasbih"), "Tasbeeh"),
    (("tahlil", "la ilaha"), "Tahlil"),
)

QURAN_PART_KEYWORDS = ("juz", "para", "sipara")
QURAN_PART_NUMBERED = "Juz {number}"
QURAN_PART_UNNUMBERED = "Quran Juz"

# The 114 Surahs in mushaf order, as offered by the Surah picker.
ALL_SURAHS = (
    "Al-Fatihah", "Al-Baqarah", "Al-Imran", "An-Nisa", "Al-Ma'idah", "Al-An'am", "Al-A'raf", "Al-Anfal",
    "At-Tawbah", "Yunus", "Hud", "Yusuf", "Ar-Ra'd", "Ibrahim", "Al-Hijr", "An-Nahl", "Al-Isra", "Al-Kahf",
    "Maryam", "Ta-Ha", "Al-Anbiya", "Al-Hajj", "Al-Mu'minun", "An-Nur", "Al-Furqan", "Ash-Shu'ara",
    "An-Naml", "Al-Qasas", "Al-Ankabut", "Ar-Rum", "Luqman", "As-Sajdah", "Al-Ahzab", "Saba", "Fatir",
    "Ya-Sin", "As-Saffat", "Sad", "Az-Zumar", "Ghafir", "Fussilat", "Ash-Shura", "Az-Zukhruf", "Ad-Dukhan",
    "Al-Jathiyah", "Al-Ahqaf", "Muhammad", "Al-Fath", "Al-Hujurat", "Qaf", "Adh-Dhariyat", "At-Tur",
    "An-Najm", "Al-Qamar", "Ar-Rahman", "Al-Waqi'ah", "Al-Hadid", "Al-Mujadila", "Al-Hashr", "Al-Mumtahanah",
    "As-Saff", "Al-Jumu'ah", "Al-Munafiqun", "At-Taghabun", "At-Talaq", "At-Tahrim", "Al-Mulk", "Al-Qalam",
    "Al-Haqqah", "Al-Ma'arij", "Nuh", "Al-Jinn", "Al-Muzzammil", "Al-Muddaththir", "Al-Qiyamah", "Al-Insan",
    "Al-Mursalat", "An-Naba", "An-Nazi'at", "Abasa", "At-Takwir", "Al-Infitar", "Al-Mutaffifin",
    "Al-Inshiqaq", "Al-Buruj", "At-Tariq", "Al-A'la", "Al-Ghashiyah", "Al-Fajr", "Al-Balad", "Ash-Shams",
    "Al-Layl", "Ad-Duhaa", "Ash-Sharh", "At-Tin", "Al-Alaq", "Al-Qadr", "Al-Bayyinah", "Az-Zalzalah",
    "Al-Adiyat", "Al-Qari'ah", "At-Takathur", "Al-Asr", "Al-Humazah", "Al-Fil", "Quraysh", "Al-Ma'un",
    "Al-Kawthar", "Al-Kafirun", "An-Nasr", "Al-Masad", "Al-Ikhlas", "Al-Falaq", "An-Nas",
)
