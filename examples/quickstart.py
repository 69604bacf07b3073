"""
BlockAtlas Quick Start Example

Builds (or reuses) blocks-6.png from images/terrain.png and saves a few
individual block images next to it.
"""

from blockatlas import create

# Needs images/terrain.png the first time; later runs reuse images/blocks-6.png
images = create(6, "images")
print(f"Atlas is {images.size[0]}x{images.size[1]}")

for name, block_id, data in [("stone", 1, 0), ("stairs", 53, 2), ("torch", 50, 1)]:
    slot = images.offset(block_id, data)
    images.slot_image(slot).save(f"images/{name}.png")
    print(f"✅ Saved images/{name}.png (slot {slot}, opaque={images.opacity[slot]})")
