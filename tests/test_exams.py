from sqlalchemy import func, select

from exam_bank.models.orm import Exam


def test_list_empty(client):
    r = client.get("/exams")
    assert r.status_code == 200
    assert r.json() == []


def test_create(client, create_question):
    qid = create_question()
    r = client.post("/exams", json={"title": "Prova de Matemática", "subject": "Matemática", "questionIds": [qid]})
    assert r.status_code == 201
    body = r.json()
    assert body["id"] > 0
    assert body["message"] == "Prova criada com sucesso"
    assert r.headers["location"].endswith(f"/exams/{body['id']}")


def test_create_accepts_snake_case_ids(client, create_question):
    qid = create_question()
    r = client.post("/exams", json={"title": "Prova", "subject": "Matemática", "question_ids": [qid]})
    assert r.status_code == 201


def test_create_with_unknown_question(client, db_session):
    r = client.post("/exams", json={"title": "Prova", "subject": "Teste", "questionIds": [999]})
    assert r.status_code == 400
    assert r.json() == {
        "message": "Questões com IDs 999 não foram encontradas",
        "success": False,
        "error": "referential_violation",
    }
    assert db_session.scalar(select(func.count()).select_from(Exam)) == 0


def test_missing_ids_listed_in_input_order(client, create_question):
    qid = create_question()
    r = client.post("/exams", json={"title": "Prova", "subject": "Teste", "questionIds": [999, qid, 998, 999]})
    assert r.status_code == 400
    assert r.json()["message"] == "Questões com IDs 999, 998 não foram encontradas"
    assert client.get("/exams").json() == []


def test_create_requires_a_question(client):
    r = client.post("/exams", json={"title": "Prova", "subject": "Teste", "questionIds": []})
    assert r.status_code == 400
    assert r.json()["error"] == "validation_failed"
    assert r.json()["errors"] == ["Deve haver pelo menos 1 questão"]


def test_create_field_messages(client, create_question):
    qid = create_question()
    r = client.post("/exams", json={"title": "t" * 201, "subject": "", "questionIds": [qid]})
    assert r.status_code == 400
    assert r.json()["errors"] == [
        "O título deve ter no máximo 200 caracteres",
        "A disciplina é obrigatória",
    ]


def test_missing_question_ids(client):
    r = client.post("/exams", json={"title": "Prova", "subject": "Teste"})
    assert r.status_code == 400
    assert r.json()["errors"] == ["É necessário pelo menos uma questão"]


def test_detail_nests_questions_in_input_order(client, create_question, create_exam):
    a = create_question(title="A", topics=["Álgebra"])
    b = create_question(title="B", topics=["Geometria"])
    exam_id = create_exam([b, a])

    r = client.get(f"/exams/{exam_id}")
    assert r.status_code == 200
    exam = r.json()
    assert exam["title"] == "Prova de Matemática"
    assert exam["subject"] == "Matemática"
    assert [q["id"] for q in exam["questions"]] == [b, a]
    assert exam["questions"][1]["topics"] == ["Álgebra"]
    assert len(exam["questions"][0]["alternatives"]) == 2


def test_duplicate_ids_collapse(client, create_question, create_exam):
    qid = create_question()
    exam_id = create_exam([qid, qid])
    assert len(client.get(f"/exams/{exam_id}").json()["questions"]) == 1


def test_list_has_question_count(client, create_question, create_exam):
    a = create_question()
    b = create_question()
    create_exam([a, b], title="Duas")
    create_exam([a], title="Uma")

    items = client.get("/exams").json()
    assert [(e["title"], e["questionCount"]) for e in items] == [("Duas", 2), ("Uma", 1)]
    assert set(items[0]) == {"id", "title", "subject", "questionCount"}


def test_get_missing(client):
    for _ in range(2):
        r = client.get("/exams/999")
        assert r.status_code == 404
        assert r.json()["message"] == "Prova com ID 999 não encontrada"
        assert r.json()["success"] is False


def test_update(client, create_question, create_exam):
    a = create_question(title="A")
    b = create_question(title="B")
    exam_id = create_exam([a])

    r = client.put(f"/exams/{exam_id}", json={"title": "Prova Atualizada", "subject": "Física", "questionIds": [b, a]})
    assert r.status_code == 200
    assert r.json() == {"message": "Prova atualizada com sucesso", "success": True}

    exam = client.get(f"/exams/{exam_id}").json()
    assert exam["title"] == "Prova Atualizada"
    assert exam["subject"] == "Física"
    assert [q["title"] for q in exam["questions"]] == ["B", "A"]


def test_update_missing_exam(client, create_question):
    qid = create_question()
    r = client.put("/exams/77", json={"title": "Prova", "subject": "Teste", "questionIds": [qid]})
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"


def test_update_with_unknown_question_changes_nothing(client, create_question, create_exam):
    qid = create_question()
    exam_id = create_exam([qid])

    r = client.put(f"/exams/{exam_id}", json={"title": "Outra", "subject": "Teste", "questionIds": [qid, 555]})
    assert r.status_code == 400
    assert r.json()["message"] == "Questões com IDs 555 não foram encontradas"

    exam = client.get(f"/exams/{exam_id}").json()
    assert exam["title"] == "Prova de Matemática"
    assert [q["id"] for q in exam["questions"]] == [qid]


def test_delete_keeps_questions(client, create_question, create_exam):
    qid = create_question(title="A")
    exam_id = create_exam([qid])

    detail = client.get(f"/exams/{exam_id}").json()
    assert len(detail["questions"]) == 1
    assert detail["questions"][0]["title"] == "A"

    r = client.delete(f"/exams/{exam_id}")
    assert r.status_code == 200
    assert r.json() == {"message": "Prova removida com sucesso", "success": True}

    assert client.get(f"/exams/{exam_id}").status_code == 404
    assert client.get(f"/questions/{qid}").status_code == 200
    assert client.delete(f"/exams/{exam_id}").status_code == 404


def test_question_id_beyond_integer_range_is_missing(client, create_question, create_exam):
    huge = 99999999999999999999
    qid = create_question()
    payload = {"title": "Prova", "subject": "Teste", "questionIds": [qid, huge]}
    r = client.post("/exams", json=payload)
    assert r.status_code == 400
    assert r.json() == {
        "message": f"Questões com IDs {huge} não foram encontradas",
        "success": False,
        "error": "referential_violation",
    }
    assert client.get("/exams").json() == []

    eid = create_exam([qid])
    r = client.put(f"/exams/{eid}", json=payload)
    assert r.status_code == 400
    assert r.json()["error"] == "referential_violation"
    assert [q["id"] for q in client.get(f"/exams/{eid}").json()["questions"]] == [qid]


def test_exam_id_beyond_integer_range_is_not_found(client):
    r = client.get("/exams/99999999999999999999")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"
    assert client.delete("/exams/99999999999999999999").status_code == 404
