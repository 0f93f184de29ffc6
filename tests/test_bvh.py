from cg2d.bvh import LEAF_SIZE, MAX_DEPTH, Bvh
from cg2d.geom import Bbox, Pt


def grid_boxes(n=200):
    out = []
    for i in range(n):
        x, y = (i % 20) * 5.0, (i // 20) * 10.0
        out.append((i, Bbox(x, y, x + 1.0, y + 1.0)))
    return out


def test_enclosing_finds_only_matching_boxes():
    bvh = Bvh(Bbox(0, 0, 100, 100))
    boxes = grid_boxes()
    for e, box in boxes:
        bvh.insert(e, box)

    assert len(bvh) == len(boxes)
    assert len(boxes) > LEAF_SIZE
    assert bvh.depth() > 1
    for e, box in boxes:
        assert list(bvh.enclosing(Pt(box.min_x + 0.5, box.min_y + 0.5))) == [e]
    assert list(bvh.enclosing(Pt(3.0, 3.0))) == []


def test_large_box_reported_once():
    bvh = Bvh(Bbox(0, 0, 100, 100))
    for e, box in grid_boxes():
        bvh.insert(e, box)
    bvh.insert(999, Bbox(-10, -10, 110, 110))

    assert list(bvh.enclosing(Pt(52.5, 52.5))) == [999]
    assert sorted(bvh.enclosing(Pt(0.5, 0.5))) == [0, 999]


def test_remove():
    bvh = Bvh(Bbox(0, 0, 100, 100))
    boxes = grid_boxes()
    for e, box in boxes:
        bvh.insert(e, box)

    e, box = boxes[57]
    bvh.remove(e, box)
    assert len(bvh) == len(boxes) - 1
    assert list(bvh.enclosing(Pt(box.min_x + 0.5, box.min_y + 0.5))) == []
    e2, box2 = boxes[58]
    assert list(bvh.enclosing(Pt(box2.min_x + 0.5, box2.min_y + 0.5))) == [e2]


def test_points_outside_domain_find_nothing():
    bvh = Bvh(Bbox(0, 0, 10, 10))
    bvh.insert(1, Bbox(-5, -5, 20, 20))
    assert list(bvh.enclosing(Pt(5, 5))) == [1]
    assert list(bvh.enclosing(Pt(15, 15))) == []


def test_many_overlapping_boxes_stay_bounded():
    bvh = Bvh(Bbox(0, 0, 100, 100))
    # усі прямокутники містять (50, 50), як описані кола віяла навколо вершини
    for k in range(100):
        r = 1.0 + 0.1 * k
        bvh.insert(k, Bbox(50 - r, 50 - 0.5 * r, 50 + 0.5 * r, 50 + r))
    assert bvh.depth() <= MAX_DEPTH + 1
    assert sorted(bvh.enclosing(Pt(50.0, 50.0))) == list(range(100))
