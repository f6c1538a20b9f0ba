# Static reference data shown in the selectors. Values observed in fetched
# submissions are merged on top of these by the grading view.

SUBJECTS = [
    "Cloud Computing",
    "Computer Programming",
    "Database Systems",
    "Network Fundamentals",
    "Web Application Development",
]

LEVEL_VOCATIONAL = "ปวช."
LEVEL_HIGHER_VOCATIONAL = "ปวส."

LEVELS = [LEVEL_VOCATIONAL, LEVEL_HIGHER_VOCATIONAL]

# valid year values per level
YEARS_BY_LEVEL = {
    LEVEL_VOCATIONAL: ["1", "2", "3"],
    LEVEL_HIGHER_VOCATIONAL: ["1", "2"],
}

ROOMS = ["1", "2", "3"]

UNKNOWN_GROUP = "ไม่ระบุ"

# student id -> {name, group}
STUDENT_ROSTER = {
    "66001": {"name": "นายกิตติพงษ์ ใจดี", "group": "ปวช. 1/1"},
    "66002": {"name": "นางสาวชนิดา แสงทอง", "group": "ปวช. 1/1"},
    "66003": {"name": "นายธนากร ศรีสุข", "group": "ปวช. 1/1"},
    "66004": {"name": "นางสาวพิมพ์ชนก บุญมา", "group": "ปวช. 1/1"},
    "66005": {"name": "นายภูมิพัฒน์ วงศ์ใหญ่", "group": "ปวช. 1/1"},
    "66006": {"name": "นางสาวรัตนาภรณ์ คำดี", "group": "ปวช. 1/1"},
    "66011": {"name": "นายณัฐวุฒิ ทองคำ", "group": "ปวช. 1/2"},
    "66012": {"name": "นางสาวศิริพร มั่นคง", "group": "ปวช. 1/2"},
    "65021": {"name": "นายอนุชา พรหมมา", "group": "ปวช. 2/1"},
    "65022": {"name": "นางสาวสุนิสา แก้วใส", "group": "ปวช. 2/1"},
    "67101": {"name": "นายวีรภัทร สายบุญ", "group": "ปวส. 1/1"},
    "67102": {"name": "นางสาวอรอุมา ดวงดี", "group": "ปวส. 1/1"},
}


def roster_groups() -> list[str]:
    return sorted({info["group"] for info in STUDENT_ROSTER.values()})
