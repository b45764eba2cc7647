from __future__ import annotations

import dataclasses
import random
import unittest

from helpers import ScriptedRng

from tetris_engine.game import (
    Cell,
    InvalidKindError,
    Point,
    TetrominoType,
    create_piece,
    create_random_piece,
    kind_count,
    rotate,
)


class TestCatalogue(unittest.TestCase):
    def test_kind_count(self) -> None:
        self.assertEqual(kind_count(), 7)

    def test_every_kind_has_four_cells_inside_box(self) -> None:
        colors = set()
        for kind in range(kind_count()):
            piece = create_piece(kind)
            self.assertEqual(piece.size, 4)
            self.assertEqual(piece.kind, TetrominoType(kind))
            self.assertEqual(len(set(piece.shape)), 4)
            for row, col in piece.shape:
                self.assertTrue(0 <= row < piece.size)
                self.assertTrue(0 <= col < piece.size)
            colors.add(piece.color)
        self.assertEqual(len(colors), 7)
        self.assertNotIn(Cell.EMPTY, colors)
        self.assertNotIn(Cell.WALL, colors)

    def test_i_piece_is_vertical_sky_blue(self) -> None:
        piece = create_piece(TetrominoType.I)
        self.assertEqual(piece.color, Cell.SKY_BLUE)
        self.assertEqual(piece.shape, (Point(0, 1), Point(1, 1), Point(2, 1), Point(3, 1)))

    def test_invalid_kind(self) -> None:
        with self.assertRaises(InvalidKindError):
            create_piece(7)
        with self.assertRaises(InvalidKindError):
            create_piece(-1)
        self.assertTrue(issubclass(InvalidKindError, ValueError))

    def test_create_random_uses_injected_source(self) -> None:
        rng = ScriptedRng([3, 6])
        self.assertEqual(create_random_piece(rng).color, Cell.YELLOW)
        self.assertEqual(create_random_piece(rng).color, Cell.RED)
        self.assertEqual(rng.calls, 2)

    def test_create_random_covers_all_kinds(self) -> None:
        rng = random.Random(1234)
        kinds = {create_random_piece(rng).kind for _ in range(500)}
        self.assertEqual(kinds, set(TetrominoType))

    def test_pieces_are_immutable(self) -> None:
        piece = create_piece(0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            piece.color = Cell.RED  # type: ignore[misc]

    def test_mask_matches_shape(self) -> None:
        piece = create_piece(TetrominoType.T)
        mask = piece.mask()
        self.assertEqual(mask.shape, (4, 4))
        self.assertEqual(int(mask.sum()), 4)
        for row, col in piece.shape:
            self.assertEqual(mask[row, col], 1)

    def test_cells_at_translates_offsets(self) -> None:
        piece = create_piece(TetrominoType.O)
        self.assertEqual(
            piece.cells_at(5, 3),
            [Point(6, 4), Point(6, 5), Point(7, 4), Point(7, 5)],
        )


class TestRotation(unittest.TestCase):
    def test_quarter_turn_maps_row_col(self) -> None:
        piece = create_piece(TetrominoType.J)
        turned = rotate(piece)
        self.assertEqual(turned.shape, (Point(0, 2), Point(1, 2), Point(2, 2), Point(2, 1)))
        self.assertEqual(turned.color, piece.color)
        self.assertEqual(turned.size, piece.size)
        # source piece untouched
        self.assertEqual(piece.shape, create_piece(TetrominoType.J).shape)

    def test_method_and_function_agree(self) -> None:
        piece = create_piece(TetrominoType.S)
        self.assertEqual(piece.rotated(), rotate(piece))

    def test_four_turns_restore_shape(self) -> None:
        for kind in TetrominoType:
            piece = create_piece(kind)
            turned = piece
            for _ in range(4):
                turned = rotate(turned)
            self.assertEqual(set(turned.shape), set(piece.shape), kind.name)

    def test_rotation_stays_inside_box(self) -> None:
        for kind in TetrominoType:
            turned = create_piece(kind)
            for _ in range(3):
                turned = rotate(turned)
                for row, col in turned.shape:
                    self.assertTrue(0 <= row < 4 and 0 <= col < 4)


if __name__ == "__main__":
    unittest.main()
