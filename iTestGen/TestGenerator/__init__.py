from iTestGen.TestGenerator.ExprTranslator import ExprTranslator
from iTestGen.TestGenerator.SymbolicExecutor import SymbolicExecutor
from iTestGen.TestGenerator.InputSynthesizer import InputSynthesizer
from iTestGen.TestGenerator.TestGenerator import TestGenerator
