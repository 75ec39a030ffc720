import unittest
from unittest import mock

from brainrepl import Engine, ScriptedLines, StepLimitExceeded, Tape, tokenize
from brainrepl.instructions import Instruction, Op
from brainrepl.tokenizer import ResolutionState


class TapeTests(unittest.TestCase):
    def test_initial_state(self) -> None:
        tape = Tape()
        self.assertEqual(list(tape.cells), [0])
        self.assertEqual(tape.pointer, 0)
        self.assertEqual(tape.render(), "[0]")

    def test_wraparound(self) -> None:
        tape = Tape()
        tape.decrement()
        self.assertEqual(tape.current, 255)
        tape.increment()
        self.assertEqual(tape.current, 0)
        tape.add(300)
        self.assertEqual(tape.current, 44)

    def test_lazy_growth(self) -> None:
        tape = Tape()
        for _ in range(5):
            tape.move_right()
        self.assertEqual(len(tape), 6)
        self.assertEqual(tape.pointer, 5)
        tape.move_left()
        tape.move_right()
        self.assertEqual(len(tape), 6)

    def test_move_left_at_origin_is_noop(self) -> None:
        tape = Tape()
        tape.move_left()
        tape.move_left()
        self.assertEqual(tape.pointer, 0)
        self.assertEqual(len(tape), 1)

    def test_output_is_buffered_until_flushed(self) -> None:
        tape = Tape()
        tape.add(72)
        tape.output()
        tape.add(1)
        tape.output()
        self.assertEqual(tape.flush_output(), "HI")
        self.assertEqual(tape.flush_output(), "")

    def test_input_adds_first_character(self) -> None:
        tape = Tape(read_line=ScriptedLines(["AB"]))
        tape.add(1)
        tape.input()
        self.assertEqual(tape.current, 66)

    def test_input_empty_line_or_eof_leaves_cell(self) -> None:
        tape = Tape(read_line=ScriptedLines([""]))
        tape.add(7)
        tape.input()
        tape.input()
        self.assertEqual(tape.current, 7)

    def test_input_truncates_to_low_byte(self) -> None:
        tape = Tape(read_line=ScriptedLines(["Ł"]))
        tape.input()
        self.assertEqual(tape.current, 0x41)

    def test_render_marks_cursor(self) -> None:
        tape = Tape()
        tape.add(3)
        tape.move_right()
        tape.add(255)
        tape.move_right()
        tape.move_left()
        self.assertEqual(tape.render(), "3 [255] 0")
        self.assertEqual(str(tape), tape.render())


class EngineTests(unittest.TestCase):
    def test_extend_does_not_execute(self) -> None:
        engine = Engine()
        engine.extend(tokenize("+++"))
        self.assertEqual(engine.instruction_count, 3)
        self.assertEqual(engine.pc, 0)
        self.assertEqual(engine.tape.current, 0)

    def test_multiplication_loop_outputs_a(self) -> None:
        engine = Engine()
        engine.extend(tokenize("++++++[>++++++++++<-]>+++++."))
        self.assertEqual(engine.run(), "A")
        self.assertEqual(list(engine.tape.cells), [0, 65])

    def test_echo_input(self) -> None:
        engine = Engine(read_line=ScriptedLines(["A"]))
        engine.extend(tokenize(",."))
        self.assertEqual(engine.run(), "A")
        self.assertEqual(engine.tape.current, 65)

    def test_loop_skipped_when_cell_is_zero(self) -> None:
        engine = Engine()
        engine.extend(tokenize("[+++].+"))
        self.assertEqual(engine.run(), "\x00")
        self.assertEqual(engine.tape.current, 1)

    def test_run_resumes_after_previous_pass(self) -> None:
        engine = Engine()
        engine.extend(tokenize("+++"))
        engine.run()
        engine.extend(tokenize("+[-]", ResolutionState(offset=engine.instruction_count)))
        engine.run()
        self.assertEqual(engine.pc, 7)
        self.assertEqual(engine.tape.current, 0)
        self.assertEqual(engine.run(), "")

    def test_step_yields_snapshots(self) -> None:
        engine = Engine()
        engine.extend(tokenize("++."))
        states = list(engine.step(tape_window=2))
        self.assertEqual([str(s.instruction) for s in states[:-1]], ["+", "+", "."])
        self.assertIsNone(states[-1].instruction)
        self.assertEqual(states[-1].pc, 3)
        self.assertEqual(states[-1].output, "\x02")
        self.assertEqual(states[-1].tape, [2])

    def test_step_limit_aborts_pass(self) -> None:
        engine = Engine()
        engine.extend(tokenize("+[]"))
        with self.assertRaises(StepLimitExceeded):
            engine.run(max_steps=10)
        self.assertEqual(engine.pc, engine.instruction_count)
        engine.extend(tokenize("-", ResolutionState(offset=engine.instruction_count)))
        engine.run(max_steps=10)
        self.assertEqual(engine.tape.current, 0)

    def test_run_does_not_build_snapshots(self) -> None:
        engine = Engine()
        engine.extend(tokenize("++++[>++++++++[>.<-]<-]"))
        with mock.patch.object(Engine, "_snapshot", side_effect=AssertionError("snapshot")):
            output = engine.run()
        self.assertEqual(len(output), 32)
        self.assertEqual(engine.pc, engine.instruction_count)

    def test_step_limit_aborts_run_without_snapshots(self) -> None:
        engine = Engine()
        engine.extend(tokenize("+[.]"))
        with mock.patch.object(Engine, "_snapshot", side_effect=AssertionError("snapshot")):
            with self.assertRaises(StepLimitExceeded):
                engine.run(max_steps=100)
        self.assertEqual(engine.tape.flush_output(), "")

    def test_unresolved_jump_trips_assertion(self) -> None:
        engine = Engine()
        engine.extend([Instruction(Op.JUMP_IF_ZERO)])
        with self.assertRaises(AssertionError):
            engine.run()

    def test_reset_clears_program_and_tape(self) -> None:
        engine = Engine()
        engine.extend(tokenize(">+"))
        engine.run()
        engine.reset()
        self.assertEqual(engine.instruction_count, 0)
        self.assertEqual(engine.pc, 0)
        self.assertEqual(engine.tape.render(), "[0]")


if __name__ == "__main__":
    unittest.main()
