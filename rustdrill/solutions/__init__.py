"""Worked solutions to quizzes, basics, conversions, errors, iterators, hash maps and records."""