import sys
import random
import subprocess
from datetime import datetime, timedelta

from core.document import Document
from core.storage import ensure_notebook, save_document

FALLBACK_TEXTS = [
    "The early bird catches the worm.",
    "A journey of a thousand miles begins with a single step.",
    "When life gives you lemons, make lemonade.",
    "The pen is mightier than the sword.",
    "Actions speak louder than words.",
    "Better late than never.",
    "Every cloud has a silver lining.",
    "Fortune favors the bold.",
    "Knowledge is power.",
    "Practice makes perfect.",
    "Rome wasn't built in a day.",
    "All that glitters is not gold.",
    "**Bold** claims need `code` and _emphasis_.",
    "- [ ] a markdown task inside a block",
]

def get_fortune_text():
    """Random text from the fortune command, with fallback phrases if not available."""
    try:
        result = subprocess.run(['fortune', '-s'], capture_output=True, text=True, timeout=5)
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    except (subprocess.SubprocessError, FileNotFoundError):
        pass
    return random.choice(FALLBACK_TEXTS)

def build_document(title, when, blocks):
    """Grow an outline through the same operations the editor keys use."""
    doc = Document.new(title, get_fortune_text())
    doc.date = when
    outline = doc.outline
    current = outline[0].id

    for _ in range(blocks - 1):
        new_block = outline.split_after(current)
        outline.set_content(new_block.id, get_fortune_text())
        roll = random.random()
        if roll < 0.35:
            outline.indent(new_block.id)
        elif roll < 0.5:
            outline.unindent(new_block.id)
        current = new_block.id

    return doc

def main():
    if len(sys.argv) != 4:
        print(f"Usage: {sys.argv[0]} /path/to/notebook DOCUMENTS BLOCKS_PER_DOCUMENT")
        print("Note: Install 'fortune' command for better random text (apt install fortune-mod or brew install fortune)")
        sys.exit(1)

    nb_dir = sys.argv[1]
    count = int(sys.argv[2])
    blocks = max(1, int(sys.argv[3]))

    info = ensure_notebook(nb_dir)
    print(f"{'Created' if info['created'] else 'Using'} notebook {info['path']}")

    now = datetime.now().astimezone()
    for i in range(count):
        when = now - timedelta(days=random.randint(0, 365))
        doc = build_document(f"Sample {i + 1}", when, blocks)
        save_document(nb_dir, doc)
        if (i + 1) % 10 == 0:
            print(f"Created {i + 1} documents...")

    print("Done creating documents")

if __name__ == '__main__':
    main()
