import pytest

from kappa import errors
from kappa.printer import render
from kappa.types.singletons import Null, Terminate, Void
from kappa.types.values import FALSE, TRUE, Integer, Procedure

COUNTER = """
(define make-counter
  (lambda ()
    (let ((n 0))
      (lambda () (set! n (+ n 1)) n))))
"""

FACT = """
(define fact
  (lambda (n)
    (if (= n 0) 1 (* n (fact (- n 1))))))
"""


# -----------------------------------------------------
# Closures and scope
# -----------------------------------------------------
def test_counter_keeps_its_own_state(run):
    assert run(COUNTER + "(define c (make-counter)) (c) (c) (c)") == Integer(3)


def test_counters_are_independent(run):
    source = COUNTER + """
    (define a (make-counter))
    (define b (make-counter))
    (a) (a)
    (b)
    """
    assert run(source) == Integer(1)


def test_scope_is_lexical_not_dynamic(run):
    source = """
    (define x 1)
    (define f (lambda () x))
    (define g (lambda (x) (f)))
    (g 2)
    """
    assert run(source) == Integer(1)


def test_closure_captures_argument(run):
    source = """
    (define (adder n) (lambda (x) (+ x n)))
    (define add5 (adder 5))
    (add5 10)
    """
    assert run(source) == Integer(15)


def test_factorial(run):
    assert run(FACT + "(fact 10)") == Integer(3628800)


def test_factorial_overflows_fixed_width(run):
    with pytest.raises(errors.KappaIntegerOverflow):
        run(FACT + "(fact 13)")


def test_function_define_sugar(run):
    assert run("(define (sq x) (* x x)) (sq 7)") == Integer(49)


# -----------------------------------------------------
# Shadowing primitives and keywords at run time
# -----------------------------------------------------
def test_parameter_shadows_primitive(run):
    assert run("(define (f car) (car 1)) (f (lambda (x) (+ x 1)))") == Integer(2)


def test_parameter_shadows_keyword(run):
    assert run("(define (g if) (if 1 2)) (g (lambda (a b) (+ a b)))") == Integer(3)


def test_top_level_define_shadows_primitive(run):
    assert run("(define car (lambda (x) 99)) (car (cons 1 2))") == Integer(99)


def test_let_shadows_primitive(run):
    assert run("(let ((list (lambda (x) (* x 2)))) (list 4))") == Integer(8)


# -----------------------------------------------------
# Primitives as first-class values
# -----------------------------------------------------
def test_variadic_primitive_as_argument(run):
    assert run("(define (apply2 f a b) (f a b)) (apply2 + 1 2)") == Integer(3)
    assert run("(define (apply2 f a b) (f a b)) (apply2 < 1 2)") == TRUE


def test_minus_as_value_negates_one_argument(run):
    assert run("(define (neg f) (f 5)) (neg -)") == Integer(-5)


def test_divide_as_value_inverts_one_argument(run):
    assert render(run("(define (inv f) (f 4)) (inv /)")) == "1/4"


def test_comparison_as_value_needs_two_arguments(run):
    with pytest.raises(errors.KappaWrongArgCount):
        run("(define (lt f) (f 1)) (lt <)")


def test_fixed_arity_primitive_as_value(run):
    assert run("((lambda (f) (f (cons 1 2))) car)") == Integer(1)
    with pytest.raises(errors.KappaWrongArgCount):
        run("((lambda (f) (f 1 2)) car)")


def test_nullary_primitives_as_values(run):
    assert run("((lambda (f) (f)) void)") is Void
    assert run("((lambda (f) (f)) exit)") is Terminate


def test_primitive_values_are_shared(run):
    assert run("(eq? car car)") == TRUE
    assert run("(procedure? +)") == TRUE
    assert isinstance(run("list"), Procedure)


def test_logic_primitive_as_value_sees_values(run):
    assert run("((lambda (f) (f 1 #f)) and)") == FALSE
    assert run("((lambda (f) (f #f 2)) or)") == Integer(2)


# -----------------------------------------------------
# Variadic lambdas
# -----------------------------------------------------
def test_variadic_lambda_collects_arguments(run):
    assert render(run("((lambda args args) 1 2 3)")) == "(1 2 3)"
    assert run("((lambda args args))") is Null


def test_variadic_lambda_body(run):
    source = """
    (define count
      (lambda xs
        (letrec ((len (lambda (l) (if (null? l) 0 (+ 1 (len (cdr l)))))))
          (len xs))))
    (count 'a 'b 'c)
    """
    assert run(source) == Integer(3)


# -----------------------------------------------------
# define / set! interplay
# -----------------------------------------------------
def test_internal_define(run):
    assert run("(define (f x) (define y (* x 2)) (+ y 1)) (f 5)") == Integer(11)


def test_internal_define_does_not_leak(run):
    with pytest.raises(errors.KappaUnboundVariable):
        run("(define (f x) (define y x) y) (f 1) y")


def test_define_inside_begin_reaches_later_forms(run):
    assert run("(begin (define z 5)) z") == Integer(5)
    assert run("(begin (define z 5) (define w (+ z 1))) w") == Integer(6)


def test_define_in_nested_begin_shadows_primitive(run):
    assert run("(begin (begin (define car (lambda (x) 9))) (car 2))") == Integer(9)
    assert run("(define (f) (begin (define car (lambda (x) 9))) (car 2)) (f)") == Integer(9)


def test_dotted_parameter_list_is_rejected(run):
    with pytest.raises(errors.KappaShapeError):
        run("(define (f . args) args) (f 1 2)")


def test_set_is_visible_to_earlier_closures(run):
    assert run("(define x 1) (define (get) x) (set! x 2) (get)") == Integer(2)


def test_redefinition_makes_a_new_binding(run):
    source = "(define x 1) (define (get) x) (define x 2) (list (get) x)"
    assert render(run(source)) == "(1 2)"


def test_define_sees_its_own_placeholder(run):
    assert run("(define x x) x") is Void


def test_set_inside_lambda_updates_outer_binding(run):
    source = """
    (define total 0)
    (define (add! n) (set! total (+ total n)))
    (add! 3)
    (add! 4)
    total
    """
    assert run(source) == Integer(7)


# -----------------------------------------------------
# Pair mutation
# -----------------------------------------------------
def test_set_car_and_set_cdr(run):
    source = "(define p (cons 1 2)) (set-car! p 10) (set-cdr! p '(20)) p"
    assert render(run(source)) == "(10 20)"


def test_cyclic_list(run):
    source = "(define x (list 1 2)) (set-cdr! (cdr x) x) x"
    value = run(source)
    assert render(value) == "(1 2 . ...)"
    assert run(source + " (list? x)") == FALSE


# -----------------------------------------------------
# letrec
# -----------------------------------------------------
def test_letrec_binds_in_order(run):
    assert run("(letrec ((a 1) (b (+ a 1))) b)") == Integer(2)


def test_letrec_later_name_is_void_while_earlier_runs(run):
    with pytest.raises(errors.KappaTypeError):
        run("(letrec ((b (+ a 1)) (a 1)) b)")


def test_letrec_self_recursion(run):
    source = """
    (letrec ((loop (lambda (n acc) (if (= n 0) acc (loop (- n 1) (+ acc n))))))
      (loop 50 0))
    """
    assert run(source) == Integer(1275)
